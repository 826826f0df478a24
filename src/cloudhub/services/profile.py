"""Profile service for managing user contact and personal information.

This service provides get and upsert operations for Profile data,
used by the REST API endpoints and the bulk user-data loader.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, TypedDict

from cloudhub.data.db import get_session
from cloudhub.data.models import Profile
from cloudhub.exceptions import ValidationFailedError
from cloudhub.services.users import require_user

logger = logging.getLogger(__name__)

__all__ = [
    "ProfileData",
    "get_profile",
    "save_profile",
]

# Text fields that can be set on Profile
_PROFILE_FIELDS = (
    "avatar_url",
    "phone",
    "location",
    "address",
    "website",
    "linkedin_url",
    "github_url",
)
_LIST_FIELDS = ("skills", "achievements")

MAX_CGPA = 10.0


class ProfileData(TypedDict, total=False):
    """TypedDict for profile data."""

    avatar_url: str
    phone: str
    location: str
    address: str
    website: str
    linkedin_url: str
    github_url: str
    cgpa: float
    skills: list[str]
    achievements: list[str]


def _decode_list(raw: str | None) -> list:
    try:
        decoded = json.loads(raw) if raw else []
    except (TypeError, ValueError):
        return []
    return decoded if isinstance(decoded, list) else []


def _profile_to_dict(profile: Profile) -> dict:
    """Convert a Profile model to a dictionary.

    Args:
        profile: Profile model instance

    Returns:
        Dictionary with profile data
    """
    data = {
        "id": profile.id,
        "user_id": profile.user_id,
        "cgpa": profile.cgpa,
        "updated_at": profile.updated_at,
    }
    for field in _PROFILE_FIELDS:
        data[field] = getattr(profile, field)
    for field in _LIST_FIELDS:
        data[field] = _decode_list(getattr(profile, field))
    return data


def get_profile(email: str) -> dict | None:
    """Get a user's profile information.

    Args:
        email: Email of the user

    Returns:
        Dictionary with profile data, or None if the user has no profile

    Raises:
        NotFoundError: If no account exists for the email.
    """
    with get_session() as session:
        user = require_user(session, email)
        profile = session.query(Profile).filter(Profile.user_id == user.id).first()
        return _profile_to_dict(profile) if profile else None


def save_profile(email: str, profile_data: Mapping[str, Any]) -> dict:
    """Create or replace a user profile in a single transaction.

    Fields missing from ``profile_data`` are cleared, matching the
    whole-record saves the front end performs.

    Args:
        email: Email of the user
        profile_data: Dictionary containing profile fields

    Returns:
        Dictionary with the stored profile data

    Raises:
        NotFoundError: If no account exists for the email.
        ValidationFailedError: If the CGPA is out of range.
    """
    cgpa = profile_data.get("cgpa")
    if cgpa is not None and not 0 <= float(cgpa) <= MAX_CGPA:
        raise ValidationFailedError(f"CGPA must be between 0 and {MAX_CGPA:g}")

    with get_session() as session:
        user = require_user(session, email)
        profile = session.query(Profile).filter(Profile.user_id == user.id).first()
        if profile is None:
            profile = Profile(user_id=user.id)
            session.add(profile)

        for field in _PROFILE_FIELDS:
            setattr(profile, field, profile_data.get(field) or None)
        for field in _LIST_FIELDS:
            setattr(profile, field, json.dumps([str(v) for v in profile_data.get(field) or []]))
        profile.cgpa = float(cgpa) if cgpa is not None else None

        session.flush()
        logger.info("Saved profile for %s", user.email)
        return _profile_to_dict(profile)
