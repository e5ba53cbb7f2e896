"""Financial records: model, ingestion and queries."""
