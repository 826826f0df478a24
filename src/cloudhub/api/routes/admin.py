"""Admin dashboard routes: account review, approval and deletion."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from cloudhub.api.dependencies import require_admin
from cloudhub.api.schemas.admin import (
    DeleteUserResponse,
    StatusCounts,
    UpdateStatusRequest,
    UpdateStatusResponse,
    UserListResponse,
)
from cloudhub.api.schemas.common import ErrorResponse
from cloudhub.api.schemas.users import UserResponse
from cloudhub.services import admin
from cloudhub.services.account_status import update_account_status

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/pending-users", response_model=UserListResponse)
def list_users(
    _admin_email: Annotated[str, Depends(require_admin)],
    status: Annotated[
        str | None,
        Query(description="Only return accounts in this state"),
    ] = None,
) -> UserListResponse:
    """List accounts newest first with per-status counts.

    Without ``status`` every account is returned, matching the admin
    dashboard which filters client-side between its tabs.
    """
    users = admin.list_users(status)
    return UserListResponse(
        users=[UserResponse.model_validate(user) for user in users],
        counts=StatusCounts.model_validate(admin.count_by_status()),
    )


@router.post(
    "/update-status",
    response_model=UpdateStatusResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Status is not 'approved' or 'rejected'"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Account already in the other terminal state"},
    },
)
def update_status(
    request: UpdateStatusRequest,
    _admin_email: Annotated[str, Depends(require_admin)],
) -> UpdateStatusResponse:
    """Approve or reject an account. Repeating the current decision is a no-op."""
    user, changed = update_account_status(request.email, request.status)
    message = f"User {user['account_status']} successfully"
    if not changed:
        message = f"User already {user['account_status']}"
    return UpdateStatusResponse(
        message=message,
        changed=changed,
        user=UserResponse.model_validate(user),
    )


@router.delete("/users/{email}", response_model=DeleteUserResponse)
def delete_user(
    email: Annotated[str, Path(description="Account to delete")],
    admin_email: Annotated[str, Depends(require_admin)],
) -> DeleteUserResponse:
    """Delete an account with all of its records and stored files."""
    deleted = admin.delete_user(email, acting_email=admin_email)
    return DeleteUserResponse(message=f"User {deleted['email']} deleted successfully")
