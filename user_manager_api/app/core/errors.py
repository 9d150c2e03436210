"""
Error types raised by the user store.

Services raise these exceptions; the API layer converts them into the
uniform ``{"success": false, "message": ...}`` response body (see
``core.error_handlers``).  Each error carries a human readable
``message`` that is safe to show to end users.
"""


class UserManagerError(Exception):
    """Base class for all user store errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(UserManagerError):
    """Input failed the user schema (missing/too long name, missing or duplicate email)."""


class NotFoundError(UserManagerError):
    """The requested user id does not exist."""


class StoreConnectionError(UserManagerError):
    """The database could not be reached at startup."""
