"""Pydantic schemas for portfolio endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from cloudhub.api.schemas.collections import CertificateResponse, ProjectResponse
from cloudhub.api.schemas.common import ApiModel


class PortfolioRequest(ApiModel):
    """Request body for saving a portfolio. Missing fields reset to defaults."""

    headline: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    social_links: dict[str, str] | None = Field(None, description="Network name to URL")
    theme_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{3,8}$")
    is_public: bool | None = None


class PortfolioResponse(ApiModel):
    id: int
    headline: str
    bio: str
    skills: list[str] = Field(default_factory=list)
    social_links: dict[str, str] = Field(default_factory=dict)
    theme_color: str
    is_public: bool
    updated_at: datetime


class SavePortfolioResponse(ApiModel):
    success: bool = True
    portfolio: PortfolioResponse


class PortfolioOwner(ApiModel):
    full_name: str
    email: str
    role: str
    department: str | None = None
    year_semester: str | None = None


class PublicPortfolioResponse(ApiModel):
    """The shareable portfolio page."""

    owner: PortfolioOwner
    portfolio: PortfolioResponse
    projects: list[ProjectResponse]
    certificates: list[CertificateResponse]
