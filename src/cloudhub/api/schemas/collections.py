"""Pydantic schemas for the per-user collections.

Item schemas accept the alternative keys older front ends send
(``name`` for ``title``, ``url`` for file links, ...). Responses always
use the canonical camelCase names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from cloudhub.api.schemas.common import ApiModel


class ProjectItem(ApiModel):
    """One project as sent by the client on save."""

    title: str | None = Field(None, validation_alias=AliasChoices("title", "name"))
    description: str | None = None
    technologies: list[str] | None = None
    github_url: str | None = Field(
        None, validation_alias=AliasChoices("githubUrl", "github_url", "githubLink")
    )
    live_url: str | None = None
    image_url: str | None = None
    file_url: str | None = Field(None, validation_alias=AliasChoices("fileUrl", "file_url", "url"))
    start_date: str | None = None
    end_date: str | None = None
    category: str | None = None
    semester: str | None = None
    subject: str | None = None
    tags: list[str] | None = None
    branch: str | None = Field(None, description="'draft' or 'main'")
    progress: int | None = Field(None, ge=0, le=100)
    version: str | None = None
    created_at: datetime | None = Field(None, description="Kept from an earlier load")


class ProjectResponse(ApiModel):
    id: int
    position: int
    title: str
    description: str
    technologies: list[str] = Field(default_factory=list)
    github_url: str | None = None
    live_url: str | None = None
    image_url: str | None = None
    file_url: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    category: str | None = None
    semester: str | None = None
    subject: str | None = None
    tags: list[str] = Field(default_factory=list)
    branch: str
    progress: int
    version: str | None = None
    created_at: datetime
    student_email: str | None = None


class CertificateItem(ApiModel):
    """One certificate as sent by the client on save."""

    title: str | None = Field(None, validation_alias=AliasChoices("title", "name"))
    issuer: str | None = Field(None, validation_alias=AliasChoices("issuer", "organization"))
    issue_date: str | None = Field(
        None, validation_alias=AliasChoices("issueDate", "issue_date", "date")
    )
    credential_id: str | None = None
    credential_url: str | None = Field(
        None,
        validation_alias=AliasChoices("credentialUrl", "credential_url", "certificateLink", "url"),
    )
    image_url: str | None = None
    upload_type: str | None = Field(None, description="'file' or 'link'")
    created_at: datetime | None = None


class CertificateResponse(ApiModel):
    id: int
    position: int
    title: str
    issuer: str
    issue_date: str | None = None
    credential_id: str | None = None
    credential_url: str | None = None
    image_url: str | None = None
    upload_type: str
    created_at: datetime
    student_email: str | None = None


class NoteItem(ApiModel):
    """One note as sent by the client on save."""

    title: str | None = Field(None, validation_alias=AliasChoices("title", "name"))
    subject: str | None = Field(None, validation_alias=AliasChoices("subject", "category"))
    description: str | None = None
    file_url: str | None = Field(None, validation_alias=AliasChoices("fileUrl", "file_url", "url"))
    file_type: str | None = Field(None, validation_alias=AliasChoices("fileType", "file_type", "type"))
    created_at: datetime | None = None


class NoteResponse(ApiModel):
    id: int
    position: int
    title: str
    subject: str
    description: str
    file_url: str
    file_type: str
    created_at: datetime
    student_email: str | None = None


class ResumeItem(ApiModel):
    """One resume as sent by the client on save."""

    title: str | None = Field(None, validation_alias=AliasChoices("title", "name"))
    file_url: str | None = Field(None, validation_alias=AliasChoices("fileUrl", "file_url", "url"))
    file_type: str | None = Field(None, validation_alias=AliasChoices("fileType", "file_type", "type"))
    is_primary: bool | None = None
    created_at: datetime | None = None


class ResumeResponse(ApiModel):
    id: int
    position: int
    title: str
    file_url: str
    file_type: str
    is_primary: bool
    created_at: datetime
    student_email: str | None = None


class SaveCollectionResponse(ApiModel):
    """Acknowledgement of a full-overwrite save."""

    success: bool = True
    count: int = Field(description="Number of items now stored")
