"""Pydantic schemas for user profile requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from cloudhub.api.schemas.common import ApiModel


class ProfileRequest(ApiModel):
    """Request schema for saving a profile. Missing fields are cleared."""

    avatar_url: str | None = Field(None, description="Profile picture URL")
    phone: str | None = Field(None, description="Phone number")
    location: str | None = Field(None, description="City/region")
    address: str | None = Field(None, description="Postal address")
    website: str | None = Field(None, description="Personal website URL")
    linkedin_url: str | None = Field(None, description="LinkedIn profile URL")
    github_url: str | None = Field(None, description="GitHub profile URL")
    cgpa: float | None = Field(None, ge=0, le=10, description="CGPA on a 10-point scale")
    skills: list[str] | None = None
    achievements: list[str] | None = None


class ProfileResponse(ApiModel):
    """Response schema for profile data."""

    id: int
    avatar_url: str | None = None
    phone: str | None = None
    location: str | None = None
    address: str | None = None
    website: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    cgpa: float | None = None
    skills: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    updated_at: datetime


class SaveProfileResponse(ApiModel):
    success: bool = True
    profile: ProfileResponse
