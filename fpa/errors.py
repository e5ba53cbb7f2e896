"""FP&A service exception hierarchy.

Engine code raises these; the HTTP layer maps each type to a status code
in ``fpa.main``.
"""


class FPAError(Exception):
    """Base exception for all FP&A service failures."""


class ValidationError(FPAError):
    """Raised when required caller input is missing or malformed."""


class NotFoundError(FPAError):
    """Raised when a scenario, lookup entry or audit trail does not exist."""


class StoreError(FPAError):
    """Raised when a record store write or query fails."""


class UploadParseError(ValidationError):
    """Raised when an uploaded workbook cannot be turned into raw rows."""
