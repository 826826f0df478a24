"""File storage routes: upload, URL lookup, download and delete."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from cloudhub.api.dependencies import (
    ensure_owner_access,
    get_current_email,
    is_admin,
    require_api_token,
    require_member,
)
from cloudhub.api.schemas.common import SuccessResponse
from cloudhub.api.schemas.storage import FileUrlRequest, FileUrlResponse, UploadResponse
from cloudhub.services import storage

router = APIRouter(prefix="/storage", tags=["storage"])

_TOKEN = [Depends(require_api_token)]


def _verify_file_owner(current_email: str, path: str) -> None:
    """Only the uploader or an admin may delete a stored file.

    The owner is read from the resolved path, so dot segments cannot point
    the check at one folder and the delete at another.

    Raises:
        ValidationFailedError: If the path is invalid (400).
        HTTPException: If the file belongs to someone else (403).
    """
    if storage.file_owner(path) == storage.owner_key(current_email) or is_admin(current_email):
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You do not have permission to modify this file",
    )


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_TOKEN,
)
async def upload_file(
    file: Annotated[UploadFile, File(description="File to store")],
    type: Annotated[str, Form(description="project, certificate, note or resume")],
    email: Annotated[str, Form(description="Owner's email")],
    current_email: Annotated[str, Depends(get_current_email)],
) -> UploadResponse:
    """Store a file for the caller and return its path and public URL."""
    owner = ensure_owner_access(current_email, email)
    data = await file.read()
    stored = storage.store_file(type, owner, file.filename, data)
    return UploadResponse(path=stored.path, url=stored.url, size=stored.size)


@router.post("/url", response_model=FileUrlResponse, dependencies=_TOKEN)
def get_file_url(
    request: FileUrlRequest,
    _current_email: Annotated[str, Depends(get_current_email)],
) -> FileUrlResponse:
    """Return the public URL for a stored file path."""
    storage.resolve_file(request.file_path)
    return FileUrlResponse(url=storage.public_url(request.file_path.strip().lstrip("/")))


@router.get("/files/{path:path}", response_class=FileResponse)
def download_file(path: str) -> FileResponse:
    """Download a stored file. URLs are shareable, so no caller is needed."""
    target = storage.open_file(path)
    return FileResponse(path=str(target), filename=target.name)


@router.delete("/files/{path:path}", response_model=SuccessResponse, dependencies=_TOKEN)
def delete_file(
    path: str,
    current_email: Annotated[str, Depends(require_member)],
) -> SuccessResponse:
    """Delete a stored file. Deleting a missing file still succeeds."""
    _verify_file_owner(current_email, path)
    removed = storage.delete_file(path)
    return SuccessResponse(message="File deleted" if removed else "File not found")
