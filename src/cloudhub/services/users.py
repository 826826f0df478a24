"""User lookup helpers and self-service edits of account fields.

Other services use the session-level helpers here so the email
normalisation and the "user not found" error stay consistent.
"""

from __future__ import annotations

import logging
from typing import TypedDict

from sqlalchemy.orm import Session

from cloudhub.data.db import get_session
from cloudhub.data.models import User
from cloudhub.exceptions import NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

__all__ = [
    "UserFieldsUpdate",
    "normalize_email",
    "find_user",
    "require_user",
    "user_to_dict",
    "get_user",
    "update_user_fields",
]

# Fields a user may change on their own account
_EDITABLE_FIELDS = ("full_name", "department", "year_semester", "designation")


class UserFieldsUpdate(TypedDict, total=False):
    """TypedDict for self-editable user fields."""

    full_name: str
    department: str
    year_semester: str
    designation: str


def normalize_email(email: str | None) -> str:
    """Return the canonical (trimmed, lower-cased) form of an email."""
    return (email or "").strip().lower()


def find_user(session: Session, email: str) -> User | None:
    """Get a user by email, or None if no such account exists."""
    return session.query(User).filter(User.email == normalize_email(email)).first()


def require_user(session: Session, email: str) -> User:
    """Get a user by email.

    Raises:
        NotFoundError: If no account exists for the email.
    """
    user = find_user(session, email)
    if user is None:
        raise NotFoundError("User not found")
    return user


def user_to_dict(user: User) -> dict:
    """Convert a User model to a dictionary without credentials."""
    return {
        "id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "role": user.role,
        "roll_no": user.roll_no,
        "department": user.department,
        "year_semester": user.year_semester,
        "designation": user.designation,
        "account_status": user.account_status,
        "created_at": user.created_at,
    }


def get_user(email: str) -> dict:
    """Return a user's account information.

    Raises:
        NotFoundError: If no account exists for the email.
    """
    with get_session() as session:
        return user_to_dict(require_user(session, email))


def update_user_fields(email: str, fields: UserFieldsUpdate) -> dict:
    """Apply a self-edit to the account fields of a user.

    Only keys present in ``fields`` are changed. Role, status, email and
    roll number are not editable here.

    Raises:
        NotFoundError: If no account exists for the email.
        ValidationFailedError: If the full name would become empty.
    """
    if "full_name" in fields and not (fields["full_name"] or "").strip():
        raise ValidationFailedError("Full name cannot be empty")

    with get_session() as session:
        user = require_user(session, email)
        for field in _EDITABLE_FIELDS:
            if field in fields:
                value = fields[field]
                setattr(user, field, value.strip() if isinstance(value, str) else value)
        session.flush()
        logger.info("Updated account fields for %s", user.email)
        return user_to_dict(user)
