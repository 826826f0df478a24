"""Pydantic schemas for user accounts, auth and the bulk user-data load."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from cloudhub.api.schemas.collections import (
    CertificateResponse,
    NoteResponse,
    ProjectResponse,
    ResumeResponse,
)
from cloudhub.api.schemas.common import ApiModel
from cloudhub.api.schemas.portfolio import PortfolioResponse
from cloudhub.api.schemas.profile import ProfileResponse


class UserResponse(ApiModel):
    """Response schema for account information (never includes credentials)."""

    email: str
    full_name: str = Field(
        validation_alias=AliasChoices("full_name", "fullName", "name"),
        serialization_alias="name",
    )
    role: str
    roll_no: str | None = None
    department: str | None = None
    year_semester: str | None = None
    designation: str | None = None
    account_status: str
    created_at: datetime | None = None


class SignupRequest(ApiModel):
    """Request schema for account signup."""

    email: str = ""
    password: str = ""
    full_name: str = Field("", description="Display name")
    role: str = Field("", description="'student' or 'teacher'")
    roll_no: str | None = Field(None, description="Required for students")
    department: str = ""
    year_semester: str = ""
    designation: str | None = Field(None, description="Required for teachers")


class LoginRequest(ApiModel):
    email: str = ""
    password: str = ""


class CheckEmailRequest(ApiModel):
    email: str


class CheckRollNoRequest(ApiModel):
    roll_no: str


class ExistsResponse(ApiModel):
    exists: bool


class AuthResponse(ApiModel):
    """Response schema for signup and login."""

    success: bool = True
    message: str
    user: UserResponse
    dashboard: str | None = Field(None, description="View to open after login")


class UserUpdateRequest(ApiModel):
    """Request schema for a user editing their own account fields."""

    full_name: str | None = Field(None, description="Display name")
    department: str | None = None
    year_semester: str | None = None
    designation: str | None = None


class UserDataResponse(ApiModel):
    """Everything a user owns, returned in one call after login."""

    user: UserResponse
    projects: list[ProjectResponse]
    certificates: list[CertificateResponse]
    notes: list[NoteResponse]
    resumes: list[ResumeResponse]
    portfolio: PortfolioResponse | None = None
    profile: ProfileResponse | None = None
