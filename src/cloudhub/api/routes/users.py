"""Account routes: read and self-edit of a user's own account fields."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from cloudhub.api.dependencies import get_current_email
from cloudhub.api.schemas.users import UserResponse, UserUpdateRequest
from cloudhub.services.users import get_user, normalize_email, update_user_fields

router = APIRouter(prefix="/users", tags=["users"])


def _verify_user_access(current_email: str, requested_email: str) -> str:
    """Verify that the caller is the account being accessed.

    Pending accounts may still read and edit their own account, so the
    approval state is not checked here.

    Raises:
        HTTPException: If the caller is someone else (403).
    """
    email = normalize_email(requested_email)
    if current_email != email:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this user's data",
        )
    return email


@router.get("/{email}", response_model=UserResponse)
def get_user_info(
    email: Annotated[str, Path(description="Email of the account")],
    current_email: Annotated[str, Depends(get_current_email)],
) -> UserResponse:
    """Get the caller's account information.

    Raises:
        HTTPException: If access denied (403).
        NotFoundError: If the account does not exist (404).
    """
    email = _verify_user_access(current_email, email)
    return UserResponse.model_validate(get_user(email))


@router.put("/{email}", response_model=UserResponse)
def update_user_info(
    email: Annotated[str, Path(description="Email of the account")],
    request: UserUpdateRequest,
    current_email: Annotated[str, Depends(get_current_email)],
) -> UserResponse:
    """Update the caller's name, department, year/semester or designation.

    Only fields present in the request body are changed.
    """
    email = _verify_user_access(current_email, email)
    updated = update_user_fields(email, request.model_dump(exclude_unset=True))
    return UserResponse.model_validate(updated)
