from __future__ import annotations

from cloudhub.constants.accounts import (
    ADMIN_SETTABLE_STATUSES,
    DASHBOARD_BY_ROLE,
    PENDING_DASHBOARD,
    SIGNUP_ROLES,
    AccountStatus,
    CollectionKind,
    Role,
    UploadKind,
)

__all__ = [
    "AccountStatus",
    "CollectionKind",
    "Role",
    "UploadKind",
    "ADMIN_SETTABLE_STATUSES",
    "DASHBOARD_BY_ROLE",
    "PENDING_DASHBOARD",
    "SIGNUP_ROLES",
]
