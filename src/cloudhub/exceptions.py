"""Exceptions raised by the service layer.

Each exception carries the HTTP status the API reports for it, so routers
can let them propagate and the app-level handler renders ``{"error": ...}``.

Usage:
    from cloudhub.exceptions import NotFoundError

    if user is None:
        raise NotFoundError("User not found")
"""

from __future__ import annotations


class CloudHubError(Exception):
    """Base exception for all CloudHub errors."""

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationFailedError(CloudHubError):
    """Input failed validation."""

    status_code = 400


class AuthenticationError(CloudHubError):
    """Credentials are missing or wrong."""

    status_code = 401


class AccessDeniedError(CloudHubError):
    """Caller is known but not allowed to perform the action."""

    status_code = 403


class NotFoundError(CloudHubError):
    """Requested record does not exist."""

    status_code = 404


class DuplicateError(CloudHubError):
    """A unique value (email, roll number) is already taken."""

    status_code = 409


class InvalidTransitionError(CloudHubError):
    """Account status change is not allowed from the current state."""

    status_code = 409

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot change account status from '{current}' to '{target}'")
