"""Bulk load of all of a user's data in a single request."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from cloudhub.api.dependencies import require_owner
from cloudhub.api.schemas.users import UserDataResponse
from cloudhub.services.user_data import load_user_data

router = APIRouter(prefix="/user-data", tags=["user-data"])


@router.get("/{email}", response_model=UserDataResponse)
def get_user_data(email: Annotated[str, Depends(require_owner)]) -> UserDataResponse:
    """Return the account, every collection, the portfolio and the profile.

    ``portfolio`` and ``profile`` are null until the user saves them.
    """
    return UserDataResponse.model_validate(load_user_data(email))
