"""FX rate and account map lookups."""
