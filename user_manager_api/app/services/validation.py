"""
Validation of user fields, independent of storage.

``validate_user`` checks the schema rules that do not need the
database: the name is required, trimmed and at most
``NAME_MAX_LENGTH`` characters; the email is required.  Uniqueness of
the email is enforced by the database and reported by
``UserService``.
"""

from dataclasses import dataclass
from typing import Optional

NAME_MAX_LENGTH = 20

NAME_REQUIRED = "Name is required"
NAME_TOO_LONG = f"Name must be less than {NAME_MAX_LENGTH} characters long"
EMAIL_REQUIRED = "Email is required"
EMAIL_TAKEN = "Email already exists"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of ``validate_user``.

    When ``ok`` is true, ``name`` and ``email`` hold the normalised
    values to store.  Otherwise ``reason`` explains the first rule
    that failed.
    """

    ok: bool
    name: Optional[str] = None
    email: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, name: str, email: str) -> "ValidationResult":
        return cls(ok=True, name=name, email=email)

    @classmethod
    def failure(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


def validate_user(name: Optional[str], email: Optional[str]) -> ValidationResult:
    """Check ``name`` and ``email`` against the user schema."""
    trimmed_name = name.strip() if name is not None else ""
    if not trimmed_name:
        return ValidationResult.failure(NAME_REQUIRED)
    if len(trimmed_name) > NAME_MAX_LENGTH:
        return ValidationResult.failure(NAME_TOO_LONG)
    if email is None or not email.strip():
        return ValidationResult.failure(EMAIL_REQUIRED)
    return ValidationResult.success(trimmed_name, email)
