"""Helpers for storing and retrieving uploaded files on disk.

Files live under ``<storage root>/<kind>s/<owner>/<epoch ms>_<name>`` where
``owner`` is :func:`owner_key` of the uploader's email: a readable slug
plus a digest of the normalised email, so distinct emails never share a
folder.
Paths handed to callers are relative to the storage root and always use
forward slashes.
"""

from __future__ import annotations

import hashlib
import logging
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from cloudhub.config import get_public_base_url, get_storage_root
from cloudhub.constants import UploadKind
from cloudhub.exceptions import NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
FILES_ROUTE = "/api/storage/files"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_EMAIL_SEPARATORS = re.compile(r"[@.]")
OWNER_DIGEST_LENGTH = 16


@dataclass(frozen=True)
class StoredFile:
    path: str
    url: str
    size: int


def sanitize_email(email: str) -> str:
    return _EMAIL_SEPARATORS.sub("_", email.strip().lower())


def owner_key(email: str) -> str:
    """Return the storage folder name for a user.

    The slug alone is ambiguous (``a.b@x.io`` and ``a_b@x.io`` both map to
    ``a_b_x_io``), so a digest of the normalised email is appended.
    """
    normalized = email.strip().lower()
    digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:OWNER_DIGEST_LENGTH]
    return f"{sanitize_email(normalized)}-{digest}"


def sanitize_filename(filename: str | None) -> str:
    """Keep only the base name with unsafe characters replaced by ``_``."""
    base = PurePosixPath((filename or "").replace("\\", "/")).name
    cleaned = _UNSAFE_NAME_CHARS.sub("_", base).lstrip(".")
    return cleaned or "file"


def _parse_kind(kind: str) -> UploadKind:
    try:
        return UploadKind((kind or "").strip().lower())
    except ValueError:
        allowed = ", ".join(k.value for k in UploadKind)
        raise ValidationFailedError(f"Invalid upload type. Must be one of: {allowed}") from None


def public_url(path: str) -> str:
    """Return the URL clients use to download a stored file."""
    return f"{get_public_base_url()}{FILES_ROUTE}/{path}"


def resolve_file(path: str) -> Path:
    """Map a relative storage path to an absolute path inside the storage root.

    Raises:
        ValidationFailedError: If the path is empty or escapes the storage root.
    """
    relative = (path or "").strip().lstrip("/")
    if not relative:
        raise ValidationFailedError("File path is required")
    if ".." in PurePosixPath(relative).parts:
        raise ValidationFailedError("Invalid file path")

    root = get_storage_root()
    target = (root / relative).resolve()
    if not target.is_relative_to(root):
        raise ValidationFailedError("Invalid file path")
    return target


def store_file(kind: str, email: str, filename: str | None, data: bytes) -> StoredFile:
    """Persist an uploaded file.

    Raises:
        ValidationFailedError: If the kind is unknown, the email is empty,
            or the file is empty or larger than ``MAX_UPLOAD_BYTES``.
    """
    upload_kind = _parse_kind(kind)
    if not email or not email.strip():
        raise ValidationFailedError("Email is required")
    if not data:
        raise ValidationFailedError("Uploaded file is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise ValidationFailedError(
            f"File exceeds the {MAX_UPLOAD_BYTES // (1024 * 1024)} MB upload limit"
        )

    timestamp = int(time.time() * 1000)
    relative = (
        f"{upload_kind.value}s/{owner_key(email)}/{timestamp}_{sanitize_filename(filename)}"
    )
    target = resolve_file(relative)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)

    logger.info("Stored %s upload for %s at %s (%d bytes)", upload_kind, email, relative, len(data))
    return StoredFile(path=relative, url=public_url(relative), size=len(data))


def open_file(path: str) -> Path:
    """Return the absolute path of an existing stored file.

    Raises:
        NotFoundError: If the file does not exist.
    """
    target = resolve_file(path)
    if not target.is_file():
        raise NotFoundError("File not found")
    return target


def delete_file(path: str) -> bool:
    """Delete a stored file. Missing files are not an error.

    Returns:
        True if a file was removed, False if it did not exist.
    """
    target = resolve_file(path)
    if not target.is_file():
        return False
    target.unlink()
    logger.info("Deleted stored file %s", path)
    return True


def delete_user_files(email: str) -> int:
    """Remove every stored file of a user across all upload kinds.

    Returns:
        Number of files removed.
    """
    root = get_storage_root()
    owner = owner_key(email)
    removed = 0
    for kind in UploadKind:
        owner_dir = root / f"{kind.value}s" / owner
        if not owner_dir.is_dir():
            continue
        removed += sum(1 for entry in owner_dir.rglob("*") if entry.is_file())
        shutil.rmtree(owner_dir)
    return removed


def file_owner(path: str) -> str:
    """Return the owner folder a stored path belongs to.

    The path is resolved first, so the answer reflects the file that would
    actually be touched.

    Raises:
        ValidationFailedError: If the path is invalid or not inside an
            owner folder.
    """
    target = resolve_file(path)
    parts = target.relative_to(get_storage_root()).parts
    if len(parts) < 3:
        raise ValidationFailedError("Invalid file path")
    return parts[1]
