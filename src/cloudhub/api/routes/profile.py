"""Profile routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from cloudhub.api.dependencies import require_owner
from cloudhub.api.schemas.profile import ProfileRequest, ProfileResponse, SaveProfileResponse
from cloudhub.services.profile import get_profile, save_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/{email}", response_model=ProfileResponse)
def get_profile_endpoint(email: Annotated[str, Depends(require_owner)]) -> ProfileResponse:
    """Get a user's profile.

    Args:
        email: Owner's email, already checked against the caller.

    Returns:
        ProfileResponse: The stored profile.

    Raises:
        HTTPException: If the profile was never saved (404).
    """
    profile = get_profile(email)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return ProfileResponse.model_validate(profile)


@router.post("/{email}", response_model=SaveProfileResponse)
def save_profile_endpoint(
    request: ProfileRequest,
    email: Annotated[str, Depends(require_owner)],
) -> SaveProfileResponse:
    """Create or replace a user's profile.

    Args:
        request: Full profile. Omitted fields are cleared.
        email: Owner's email, already checked against the caller.

    Returns:
        SaveProfileResponse: The stored profile.
    """
    saved = save_profile(email, request.model_dump())
    return SaveProfileResponse(profile=ProfileResponse.model_validate(saved))
