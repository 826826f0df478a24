"""Admin dashboard operations: user listing and account deletion.

Status changes live in :mod:`cloudhub.services.account_status`.
"""

from __future__ import annotations

import logging

from cloudhub.constants import AccountStatus
from cloudhub.data.db import get_session
from cloudhub.data.models import User
from cloudhub.exceptions import ValidationFailedError
from cloudhub.services.account_status import parse_status
from cloudhub.services.storage import delete_user_files
from cloudhub.services.users import require_user, user_to_dict

logger = logging.getLogger(__name__)


def list_users(status: str | None = None) -> list[dict]:
    """Return all accounts, newest first, optionally filtered by status.

    Raises:
        ValidationFailedError: If ``status`` is not a known status.
    """
    with get_session() as session:
        query = session.query(User)
        if status:
            query = query.filter(User.account_status == parse_status(status).value)
        users = query.order_by(User.created_at.desc(), User.id.desc()).all()
        return [user_to_dict(user) for user in users]


def count_by_status() -> dict[str, int]:
    """Return the number of accounts per status plus a ``total``."""
    counts = {status.value: 0 for status in AccountStatus}
    with get_session() as session:
        for (status,) in session.query(User.account_status).all():
            if status in counts:
                counts[status] += 1
    counts["total"] = sum(counts.values())
    return counts


def delete_user(email: str, acting_email: str | None = None) -> dict:
    """Delete an account and everything it owns, including stored files.

    Args:
        email: Account to delete.
        acting_email: Admin performing the deletion; admins may not delete
            themselves.

    Returns:
        Data of the deleted user.

    Raises:
        NotFoundError: If no account exists for the email.
        ValidationFailedError: If an admin tries to delete their own account.
    """
    with get_session() as session:
        user = require_user(session, email)
        if acting_email is not None and user.email == acting_email.strip().lower():
            raise ValidationFailedError("You cannot delete your own account")
        deleted = user_to_dict(user)
        session.delete(user)

    removed_files = delete_user_files(deleted["email"])
    logger.info("Deleted user %s (%d stored files removed)", deleted["email"], removed_files)
    return deleted
