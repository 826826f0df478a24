"""Tests for signup, login and admin bootstrap."""

from __future__ import annotations

import pytest

from cloudhub.data.db import get_session
from cloudhub.data.models import User
from cloudhub.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    DuplicateError,
    ValidationFailedError,
)
from cloudhub.services.auth import (
    check_email_exists,
    check_password_strength,
    check_roll_no_exists,
    ensure_admin,
    login,
    signup,
)

pytestmark = pytest.mark.usefixtures("api_db")


def _student(**overrides) -> dict:
    data = {
        "email": "Sara@Uni.edu ",
        "password": "Passw0rd!",
        "full_name": "Sara Khan",
        "role": "student",
        "roll_no": "cs101",
        "department": "Computer Science",
        "year_semester": "2nd Year - Sem 3",
    }
    data.update(overrides)
    return data


def _teacher(**overrides) -> dict:
    data = {
        "email": "prof@uni.edu",
        "password": "Passw0rd!",
        "full_name": "Prof Lee",
        "role": "teacher",
        "designation": "Professor",
        "department": "Computer Science",
        "year_semester": "N/A",
    }
    data.update(overrides)
    return data


def test_signup_creates_pending_student() -> None:
    user = signup(_student())

    assert user["email"] == "sara@uni.edu"
    assert user["roll_no"] == "CS101"
    assert user["account_status"] == "pending"
    assert "password_hash" not in user

    with get_session() as session:
        stored = session.query(User).filter(User.email == "sara@uni.edu").one()
        assert stored.password_hash != "Passw0rd!"
        assert ":" in stored.password_hash


def test_signup_teacher_has_no_roll_number() -> None:
    user = signup(_teacher(roll_no="ignored"))

    assert user["role"] == "teacher"
    assert user["roll_no"] is None
    assert user["designation"] == "Professor"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"email": ""}, "All fields are required"),
        ({"department": "  "}, "All fields are required"),
        ({"role": "admin"}, "Role must be"),
        ({"roll_no": ""}, "Roll number is required"),
        ({"email": "not-an-email"}, "valid email"),
        ({"roll_no": "CS-101"}, "alphanumeric"),
        ({"password": "short1!"}, "at least 8"),
        ({"password": "alllowercase1!"}, "uppercase"),
    ],
)
def test_signup_validation(overrides: dict, message: str) -> None:
    with pytest.raises(ValidationFailedError, match=message):
        signup(_student(**overrides))


def test_teacher_requires_designation() -> None:
    with pytest.raises(ValidationFailedError, match="Designation"):
        signup(_teacher(designation=""))


def test_signup_rejects_duplicate_email() -> None:
    signup(_student())
    with pytest.raises(DuplicateError, match="Email"):
        signup(_student(email="SARA@uni.edu", roll_no="CS999"))


def test_signup_rejects_duplicate_roll_number_case_insensitive() -> None:
    signup(_student())
    with pytest.raises(DuplicateError, match="Roll number"):
        signup(_student(email="other@uni.edu", roll_no="CS101"))


def test_existence_checks() -> None:
    assert check_email_exists("sara@uni.edu") is False
    assert check_roll_no_exists("cs101") is False
    signup(_student())
    assert check_email_exists(" SARA@uni.edu") is True
    assert check_roll_no_exists("cs101") is True
    assert check_email_exists("") is False


def test_password_strength_accepts_strong_password() -> None:
    assert check_password_strength("Abcdef1?") is None


def test_login_pending_account() -> None:
    signup(_student())

    result = login("sara@uni.edu", "Passw0rd!")

    assert result.message == "Account pending approval"
    assert result.dashboard == "pending-approval"
    assert result.user["account_status"] == "pending"


def test_login_wrong_password() -> None:
    signup(_student())
    with pytest.raises(AuthenticationError, match="Incorrect password"):
        login("sara@uni.edu", "Wrong#Pass1")


def test_login_unknown_email() -> None:
    with pytest.raises(AuthenticationError, match="No account found"):
        login("nobody@uni.edu", "Passw0rd!")


def test_login_requires_fields() -> None:
    with pytest.raises(ValidationFailedError):
        login("", "")


def test_login_rejected_account(create_account) -> None:
    create_account("rex@uni.edu", status="rejected")
    with pytest.raises(AccessDeniedError):
        login("rex@uni.edu", "Secret#123")


def test_login_approved_account(create_account) -> None:
    create_account("tia@uni.edu", role="teacher")

    result = login("TIA@uni.edu", "Secret#123")

    assert result.message == "Login successful"
    assert result.dashboard == "teacher-dashboard"


def test_ensure_admin_is_idempotent() -> None:
    user, created = ensure_admin("root@uni.edu", "Admin#2024")
    assert created is True
    assert user["role"] == "admin"
    assert user["account_status"] == "approved"

    again, created_again = ensure_admin("root@uni.edu", "other")
    assert created_again is False
    assert again["email"] == "root@uni.edu"
    assert login("root@uni.edu", "Admin#2024").dashboard == "admin-dashboard"


def test_ensure_admin_validates_input() -> None:
    with pytest.raises(ValidationFailedError):
        ensure_admin("bad", "x")
    with pytest.raises(ValidationFailedError):
        ensure_admin("ok@uni.edu", "")


def test_signup_race_on_unique_columns_is_duplicate(monkeypatch: pytest.MonkeyPatch) -> None:
    signup(_student())
    # Simulate a second request that passed the lookup before the first committed
    monkeypatch.setattr("cloudhub.services.auth.find_user", lambda session, email: None)

    with pytest.raises(DuplicateError):
        signup(_student(roll_no="cs999"))

    with get_session() as session:
        assert session.query(User).count() == 1
