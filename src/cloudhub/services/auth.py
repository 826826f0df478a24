"""Signup, login and admin bootstrap.

Passwords are stored as salted PBKDF2 hashes. New accounts start in the
``pending`` state and cannot reach approved-only views until an admin
approves them (see :mod:`cloudhub.services.account_status`).
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import os
import re
from dataclasses import dataclass
from typing import TypedDict

from sqlalchemy.exc import IntegrityError

from cloudhub.constants import SIGNUP_ROLES, AccountStatus, Role
from cloudhub.data.db import get_session
from cloudhub.data.models import User
from cloudhub.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    DuplicateError,
    ValidationFailedError,
)
from cloudhub.services.account_status import dashboard_for
from cloudhub.services.users import find_user, normalize_email, user_to_dict

logger = logging.getLogger(__name__)

_PBKDF2_ITERATIONS = 100_000
_SALT_BYTES = 16
MIN_PASSWORD_LENGTH = 8

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ROLL_NO_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

PENDING_MESSAGE = "Account pending approval"
LOGIN_MESSAGE = "Login successful"
SIGNUP_MESSAGE = "Account created successfully. Awaiting admin approval."
REJECTED_MESSAGE = "Your account has been rejected. Please contact the administrator."


class SignupData(TypedDict, total=False):
    """Fields accepted by :func:`signup`."""

    email: str
    password: str
    full_name: str
    role: str
    roll_no: str
    department: str
    year_semester: str
    designation: str


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login.

    ``dashboard`` names the view the front end should open.
    """

    user: dict
    message: str
    dashboard: str


def _hash_password(password: str) -> str:
    """Return a salted PBKDF2 hash for the given password.

    The result is stored as ``<salt_hex>:<hash_hex>``.
    """
    salt = os.urandom(_SALT_BYTES)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"{salt.hex()}:{derived.hex()}"


def _verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against a stored ``salt:hash`` string."""
    try:
        salt_hex, hash_hex = stored_hash.split(":", 1)
    except ValueError:
        return False

    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    candidate = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        _PBKDF2_ITERATIONS,
    )
    return hmac.compare_digest(candidate, expected)


def check_password_strength(password: str) -> str | None:
    """Return an error message if the password is too weak, else None."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"

    has_upper = any(ch.isupper() for ch in password)
    has_lower = any(ch.islower() for ch in password)
    has_digit = any(ch.isdigit() for ch in password)
    has_special = any(ch in SPECIAL_CHARACTERS for ch in password)
    if not (has_upper and has_lower and has_digit and has_special):
        return "Password must contain uppercase, lowercase, number, and special character"
    return None


def _clean(value: str | None) -> str:
    return (value or "").strip()


def validate_signup(data: SignupData) -> None:
    """Validate signup fields without touching the database.

    Raises:
        ValidationFailedError: On the first failed rule.
    """
    required = ("email", "password", "full_name", "department", "year_semester", "role")
    if any(not _clean(data.get(field)) for field in required):
        raise ValidationFailedError("All fields are required")

    role = _clean(data.get("role")).lower()
    if role not in SIGNUP_ROLES:
        raise ValidationFailedError("Role must be 'student' or 'teacher'")

    if role == Role.STUDENT and not _clean(data.get("roll_no")):
        raise ValidationFailedError("Roll number is required for students")
    if role == Role.TEACHER and not _clean(data.get("designation")):
        raise ValidationFailedError("Designation is required for teachers")

    if not EMAIL_PATTERN.match(_clean(data.get("email"))):
        raise ValidationFailedError("Please enter a valid email address")

    if role == Role.STUDENT and not ROLL_NO_PATTERN.match(_clean(data.get("roll_no"))):
        raise ValidationFailedError("Roll number must be alphanumeric")

    password_error = check_password_strength(data.get("password") or "")
    if password_error:
        raise ValidationFailedError(password_error)


def check_email_exists(email: str) -> bool:
    """Return True if an account already uses this email."""
    if not _clean(email):
        return False
    with get_session() as session:
        return find_user(session, email) is not None


def check_roll_no_exists(roll_no: str) -> bool:
    """Return True if a student already registered this roll number."""
    roll_no_clean = _clean(roll_no).upper()
    if not roll_no_clean:
        return False
    with get_session() as session:
        return session.query(User).filter(User.roll_no == roll_no_clean).first() is not None


def signup(data: SignupData) -> dict:
    """Create a new account in the ``pending`` state.

    Roll numbers are stored upper-cased so uniqueness is case-insensitive.

    Returns:
        Dictionary with the created user's data.

    Raises:
        ValidationFailedError: If a field is missing or malformed.
        DuplicateError: If the email or roll number is already registered.
    """
    validate_signup(data)

    email = normalize_email(data.get("email"))
    role = Role(_clean(data.get("role")).lower())
    roll_no = _clean(data.get("roll_no")).upper() if role == Role.STUDENT else None
    designation = _clean(data.get("designation")) if role == Role.TEACHER else None

    with get_session() as session:
        if find_user(session, email) is not None:
            raise DuplicateError("Email already registered")
        if roll_no and session.query(User).filter(User.roll_no == roll_no).first() is not None:
            raise DuplicateError("Roll number already registered")

        user = User(
            email=email,
            full_name=_clean(data.get("full_name")),
            password_hash=_hash_password(data["password"]),
            role=role.value,
            roll_no=roll_no,
            department=_clean(data.get("department")),
            year_semester=_clean(data.get("year_semester")),
            designation=designation,
            account_status=AccountStatus.PENDING.value,
        )
        session.add(user)
        try:
            session.flush()
        except IntegrityError:
            # A concurrent signup claimed the email or roll number first
            raise DuplicateError("Email or roll number already registered") from None
        logger.info("Signup: %s registered as %s (pending approval)", email, role.value)
        return user_to_dict(user)


def login(email: str, password: str) -> LoginResult:
    """Authenticate a user and report where they should land.

    Pending accounts authenticate successfully but are routed to the
    pending-approval view. Rejected accounts are refused.

    Raises:
        ValidationFailedError: If email or password is missing.
        AuthenticationError: If the email is unknown or the password is wrong.
        AccessDeniedError: If the account was rejected.
    """
    if not _clean(email) or not password:
        raise ValidationFailedError("Email and password are required")

    with get_session() as session:
        user = find_user(session, email)
        if user is None:
            raise AuthenticationError("No account found with this email. Please sign up first.")
        if not _verify_password(password, user.password_hash):
            raise AuthenticationError("Incorrect password")
        if user.account_status == AccountStatus.REJECTED:
            logger.info("Login refused for rejected account %s", user.email)
            raise AccessDeniedError(REJECTED_MESSAGE)

        message = PENDING_MESSAGE if user.account_status == AccountStatus.PENDING else LOGIN_MESSAGE
        return LoginResult(
            user=user_to_dict(user),
            message=message,
            dashboard=dashboard_for(user.role, user.account_status),
        )


def ensure_admin(email: str, password: str, full_name: str = "Admin User") -> tuple[dict, bool]:
    """Create an approved admin account if it does not exist yet.

    Returns:
        Tuple of (user data, created flag). An existing account is returned
        unchanged with ``created`` False.

    Raises:
        ValidationFailedError: If the email is malformed or the password is empty.
    """
    email_clean = normalize_email(email)
    if not EMAIL_PATTERN.match(email_clean):
        raise ValidationFailedError("Please enter a valid email address")
    if not password:
        raise ValidationFailedError("Password cannot be empty")

    with get_session() as session:
        existing = find_user(session, email_clean)
        if existing is not None:
            return user_to_dict(existing), False

        admin = User(
            email=email_clean,
            full_name=_clean(full_name) or "Admin User",
            password_hash=_hash_password(password),
            role=Role.ADMIN.value,
            department="Administration",
            year_semester="N/A",
            account_status=AccountStatus.APPROVED.value,
        )
        session.add(admin)
        session.flush()
        logger.info("Bootstrapped admin account %s", email_clean)
        return user_to_dict(admin), True
