"""
Error taxonomy shared by services and the API layer.

Each error carries the HTTP status it maps to; the message is what the
client sees in the ``{"message": ...}`` body.
"""


class BookExchangeError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookExchangeError):
    """Missing or malformed input."""
    status_code = 400


class UploadError(ValidationError):
    """Upload rejected before it reached a handler (no file, not an image)."""


class AuthError(BookExchangeError):
    """Bad credentials."""
    status_code = 401


class ForbiddenError(BookExchangeError):
    """Caller does not own the resource or lacks the required role."""
    status_code = 403


class NotFoundError(BookExchangeError):
    status_code = 404


class ConflictError(BookExchangeError):
    """Duplicate unique key."""
    status_code = 409


class StorageError(BookExchangeError):
    """Reading or writing the persisted document failed. Never sent to clients."""
