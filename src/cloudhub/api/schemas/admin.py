"""Pydantic schemas for admin and teacher dashboards."""

from __future__ import annotations

from pydantic import Field

from cloudhub.api.schemas.collections import (
    CertificateResponse,
    NoteResponse,
    ProjectResponse,
    ResumeResponse,
)
from cloudhub.api.schemas.common import ApiModel
from cloudhub.api.schemas.users import UserResponse


class StatusCounts(ApiModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0


class UserListResponse(ApiModel):
    users: list[UserResponse]
    counts: StatusCounts


class UpdateStatusRequest(ApiModel):
    email: str
    status: str = Field(description="'approved' or 'rejected'")


class UpdateStatusResponse(ApiModel):
    success: bool = True
    message: str
    changed: bool = Field(description="False when the account already had this status")
    user: UserResponse


class DeleteUserResponse(ApiModel):
    success: bool = True
    message: str


class TeacherStats(ApiModel):
    total_students: int
    total_projects: int
    total_certificates: int
    recent_activities: int


class StudentListResponse(ApiModel):
    students: list[UserResponse]
    stats: TeacherStats


class StudentFilesResponse(ApiModel):
    projects: list[ProjectResponse]
    certificates: list[CertificateResponse]
    notes: list[NoteResponse]
    resumes: list[ResumeResponse]
