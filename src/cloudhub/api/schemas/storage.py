"""Pydantic schemas for file storage endpoints."""

from __future__ import annotations

from cloudhub.api.schemas.common import ApiModel


class UploadResponse(ApiModel):
    success: bool = True
    path: str
    url: str
    size: int


class FileUrlRequest(ApiModel):
    file_path: str


class FileUrlResponse(ApiModel):
    url: str
