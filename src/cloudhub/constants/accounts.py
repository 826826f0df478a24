"""Account roles, approval states, upload kinds and synced collections.

Values are the lower-case strings used on the wire and in the database.
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Kind of account a user holds."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class AccountStatus(StrEnum):
    """Approval state of an account.

    New accounts start as ``PENDING``. An admin moves them to ``APPROVED``
    or ``REJECTED``; both are terminal.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UploadKind(StrEnum):
    """Categories of files a user can upload."""

    PROJECT = "project"
    CERTIFICATE = "certificate"
    NOTE = "note"
    RESUME = "resume"


class CollectionKind(StrEnum):
    """Per-user lists saved as a whole."""

    PROJECTS = "projects"
    CERTIFICATES = "certificates"
    NOTES = "notes"
    RESUMES = "resumes"


# Roles that may register through the public signup form
SIGNUP_ROLES = frozenset({Role.STUDENT, Role.TEACHER})

# Statuses an admin may set explicitly
ADMIN_SETTABLE_STATUSES = frozenset({AccountStatus.APPROVED, AccountStatus.REJECTED})

# Dashboard shown after login, keyed by role (approved accounts only)
DASHBOARD_BY_ROLE = {
    Role.ADMIN: "admin-dashboard",
    Role.TEACHER: "teacher-dashboard",
    Role.STUDENT: "student-dashboard",
}
PENDING_DASHBOARD = "pending-approval"
