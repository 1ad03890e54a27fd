"""Custom exceptions for the portfolio admin application."""
from typing import Optional


class PortfolioError(Exception):
    """Base error; ``status_code`` is what the API reports for it."""

    status_code = 500

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(PortfolioError):
    """Missing or malformed input, rejected before any mutation."""

    status_code = 400


class InvalidTypeError(ValidationError):
    """A file whose declared type is not an accepted document type."""


class NotFoundError(PortfolioError):
    status_code = 404


class CorruptPayloadError(PortfolioError):
    """Stored text that does not decode back to bytes."""

    status_code = 500


class StorageError(PortfolioError):
    """The database rejected or failed a read/write."""

    status_code = 500


class ReadError(PortfolioError):
    """A local file could not be read for upload."""
