"""Shared dependencies for API routes."""

from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Path, status

from cloudhub.config import get_api_token
from cloudhub.constants import Role
from cloudhub.data.db import get_session
from cloudhub.services.account_status import require_approved
from cloudhub.services.users import find_user, normalize_email, require_user


def require_api_token(
    authorization: Annotated[
        str | None,
        Header(description="Static bearer token: 'Bearer <token>'"),
    ] = None,
) -> None:
    """Check the static API bearer token when one is configured.

    Raises:
        HTTPException: If the token is missing or wrong (401).
    """
    expected = get_api_token()
    if expected is None:
        return

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(token.strip(), expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API token",
        )


def get_current_email(
    x_user_email: Annotated[
        str | None,
        Header(description="Email of the user the request is made for."),
    ] = None,
) -> str:
    """Get the caller's email from the X-User-Email header.

    Raises:
        HTTPException: If the header is missing (401).
    """
    email = normalize_email(x_user_email)
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required. Please provide X-User-Email header.",
        )
    return email


def ensure_owner_access(current_email: str, requested_email: str) -> str:
    """Verify the caller may use the requested user's approved-only data.

    Returns:
        The normalised requested email.

    Raises:
        HTTPException: If the caller is someone else (403).
        NotFoundError: If the user does not exist (404).
        AccessDeniedError: If the account is not approved (403).
    """
    email = normalize_email(requested_email)
    if current_email != email:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this user's data",
        )
    with get_session() as session:
        user = require_user(session, email)
        require_approved(user.account_status)
    return email


def require_owner(
    email: Annotated[str, Path(description="Email of the data owner")],
    current_email: Annotated[str, Depends(get_current_email)],
) -> str:
    """Dependency form of :func:`ensure_owner_access` for ``/{email}`` routes."""
    return ensure_owner_access(current_email, email)


def _require_role(current_email: str, allowed: frozenset[Role]) -> str:
    with get_session() as session:
        user = find_user(session, current_email)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unknown user",
            )
        require_approved(user.account_status)
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
    return current_email


def require_member(current_email: Annotated[str, Depends(get_current_email)]) -> str:
    """Allow any existing, approved account."""
    return _require_role(current_email, frozenset(Role))


def require_admin(current_email: Annotated[str, Depends(get_current_email)]) -> str:
    """Allow only approved admins."""
    return _require_role(current_email, frozenset({Role.ADMIN}))


def require_teacher(current_email: Annotated[str, Depends(get_current_email)]) -> str:
    """Allow approved teachers and admins."""
    return _require_role(current_email, frozenset({Role.TEACHER, Role.ADMIN}))


def is_admin(email: str) -> bool:
    with get_session() as session:
        user = find_user(session, email)
        return user is not None and user.role == Role.ADMIN
