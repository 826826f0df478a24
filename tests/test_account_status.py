"""Tests for the account approval state machine."""

from __future__ import annotations

import pytest

from cloudhub.constants import AccountStatus
from cloudhub.exceptions import (
    AccessDeniedError,
    InvalidTransitionError,
    NotFoundError,
    ValidationFailedError,
)
from cloudhub.services.account_status import (
    can_transition,
    dashboard_for,
    parse_status,
    require_approved,
    update_account_status,
)


@pytest.mark.parametrize(
    ("current", "target", "expected"),
    [
        ("pending", "approved", True),
        ("pending", "rejected", True),
        ("approved", "pending", False),
        ("approved", "rejected", False),
        ("rejected", "approved", False),
        ("rejected", "pending", False),
        ("approved", "approved", True),
    ],
)
def test_can_transition(current: str, target: str, expected: bool) -> None:
    assert can_transition(current, target) is expected


def test_parse_status_normalises_and_rejects_unknown() -> None:
    assert parse_status(" Approved ") is AccountStatus.APPROVED
    with pytest.raises(ValidationFailedError):
        parse_status("archived")


def test_approve_pending_account(create_account) -> None:
    create_account("amy@uni.edu", status="pending")

    user, changed = update_account_status("amy@uni.edu", "approved")

    assert changed is True
    assert user["account_status"] == "approved"


def test_repeating_terminal_state_is_noop(create_account) -> None:
    create_account("ben@uni.edu", status="rejected")

    user, changed = update_account_status("ben@uni.edu", "rejected")

    assert changed is False
    assert user["account_status"] == "rejected"


def test_switching_terminal_states_is_refused(create_account) -> None:
    create_account("cal@uni.edu", status="approved")

    with pytest.raises(InvalidTransitionError) as exc_info:
        update_account_status("cal@uni.edu", "rejected")

    assert exc_info.value.status_code == 409


def test_pending_cannot_be_set_by_admin(create_account) -> None:
    create_account("dee@uni.edu", status="pending")

    with pytest.raises(ValidationFailedError):
        update_account_status("dee@uni.edu", "pending")


def test_update_unknown_user(api_db) -> None:
    with pytest.raises(NotFoundError):
        update_account_status("ghost@uni.edu", "approved")


def test_require_approved() -> None:
    require_approved("approved")
    with pytest.raises(AccessDeniedError, match="pending"):
        require_approved("pending")
    with pytest.raises(AccessDeniedError, match="rejected"):
        require_approved("rejected")


def test_dashboard_for_each_role_and_state() -> None:
    assert dashboard_for("student", "pending") == "pending-approval"
    assert dashboard_for("teacher", "pending") == "pending-approval"
    assert dashboard_for("student", "approved") == "student-dashboard"
    assert dashboard_for("teacher", "approved") == "teacher-dashboard"
    assert dashboard_for("admin", "approved") == "admin-dashboard"
    with pytest.raises(AccessDeniedError):
        dashboard_for("student", "rejected")
