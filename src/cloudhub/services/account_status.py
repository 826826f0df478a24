"""Account approval state machine.

    pending --approve--> approved
    pending --reject---> rejected

``approved`` and ``rejected`` are terminal. Re-applying the current
terminal state is accepted as a no-op so repeated admin clicks are safe.
"""

from __future__ import annotations

import logging

from cloudhub.constants import (
    ADMIN_SETTABLE_STATUSES,
    DASHBOARD_BY_ROLE,
    PENDING_DASHBOARD,
    AccountStatus,
    Role,
)
from cloudhub.data.db import get_session
from cloudhub.exceptions import AccessDeniedError, InvalidTransitionError, ValidationFailedError
from cloudhub.services.users import require_user, user_to_dict

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[AccountStatus, frozenset[AccountStatus]] = {
    AccountStatus.PENDING: frozenset({AccountStatus.APPROVED, AccountStatus.REJECTED}),
    AccountStatus.APPROVED: frozenset(),
    AccountStatus.REJECTED: frozenset(),
}


def parse_status(value: str | None) -> AccountStatus:
    """Parse a status string.

    Raises:
        ValidationFailedError: If the value is not a known status.
    """
    try:
        return AccountStatus((value or "").strip().lower())
    except ValueError:
        raise ValidationFailedError("Invalid status") from None


def can_transition(current: AccountStatus | str, target: AccountStatus | str) -> bool:
    """Return True if ``current`` may move to ``target``.

    Staying in the same state counts as allowed.
    """
    current_status = AccountStatus(current)
    target_status = AccountStatus(target)
    if current_status == target_status:
        return True
    return target_status in ALLOWED_TRANSITIONS[current_status]


def update_account_status(email: str, status: str) -> tuple[dict, bool]:
    """Apply an admin approve/reject decision.

    Args:
        email: Account to update.
        status: ``approved`` or ``rejected``.

    Returns:
        Tuple of (updated user data, changed flag). ``changed`` is False
        when the account was already in the requested state.

    Raises:
        ValidationFailedError: If ``status`` is not approved/rejected.
        NotFoundError: If no account exists for the email.
        InvalidTransitionError: If the account is in the other terminal state.
    """
    target = parse_status(status)
    if target not in ADMIN_SETTABLE_STATUSES:
        raise ValidationFailedError("Invalid status")

    with get_session() as session:
        user = require_user(session, email)
        current = AccountStatus(user.account_status)

        if current == target:
            return user_to_dict(user), False
        if not can_transition(current, target):
            raise InvalidTransitionError(current.value, target.value)

        user.account_status = target.value
        session.flush()
        logger.info("Account status updated: %s %s -> %s", user.email, current, target)
        return user_to_dict(user), True


def require_approved(account_status: str) -> None:
    """Ensure an account may use approved-only views.

    Raises:
        AccessDeniedError: If the account is pending or rejected.
    """
    status = AccountStatus(account_status)
    if status == AccountStatus.PENDING:
        raise AccessDeniedError("Account pending approval")
    if status == AccountStatus.REJECTED:
        raise AccessDeniedError("Account has been rejected")


def dashboard_for(role: str, account_status: str) -> str:
    """Return the name of the view a user lands on after login.

    Raises:
        AccessDeniedError: If the account was rejected.
    """
    status = AccountStatus(account_status)
    if status == AccountStatus.PENDING:
        return PENDING_DASHBOARD
    require_approved(status)
    return DASHBOARD_BY_ROLE[Role(role)]
