"""Route handlers for the API."""

from cloudhub.api.routes import (
    admin,
    auth,
    collections,
    health,
    portfolio,
    profile,
    storage,
    teacher,
    user_data,
    users,
)

__all__ = [
    "admin",
    "auth",
    "collections",
    "health",
    "portfolio",
    "profile",
    "storage",
    "teacher",
    "user_data",
    "users",
]
