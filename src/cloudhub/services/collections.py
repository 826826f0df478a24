"""Full-overwrite sync of per-user collections.

Projects, certificates, notes and resumes are saved as whole lists: a
save deletes every existing row of that kind for the user and inserts
the given list in order, inside one transaction. Saving an empty list
clears the collection. Concurrent saves are not coordinated; the last
one wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from cloudhub.constants import CollectionKind
from cloudhub.data.db import Base, get_session
from cloudhub.data.models import Certificate, Note, Project, Resume
from cloudhub.exceptions import ValidationFailedError
from cloudhub.services.users import require_user

logger = logging.getLogger(__name__)

__all__ = [
    "CollectionKind",
    "COLLECTIONS",
    "save_collection",
    "get_collection",
]


@dataclass(frozen=True)
class CollectionSpec:
    """How items of one collection map onto their ORM model.

    Attributes:
        model: ORM class storing the rows.
        defaults: Column name to default value for missing/None input.
        json_fields: Columns holding JSON-encoded lists.
        choices: Column name to allowed values; anything else gets the default.
    """

    model: type[Base]
    defaults: dict[str, Any]
    json_fields: tuple[str, ...] = ()
    choices: dict[str, frozenset[str]] = field(default_factory=dict)


COLLECTIONS: dict[CollectionKind, CollectionSpec] = {
    CollectionKind.PROJECTS: CollectionSpec(
        model=Project,
        defaults={
            "title": "",
            "description": "",
            "technologies": [],
            "github_url": None,
            "live_url": None,
            "image_url": None,
            "file_url": None,
            "start_date": None,
            "end_date": None,
            "category": None,
            "semester": None,
            "subject": None,
            "tags": [],
            "branch": "main",
            "progress": 0,
            "version": None,
        },
        json_fields=("technologies", "tags"),
        choices={"branch": frozenset({"draft", "main"})},
    ),
    CollectionKind.CERTIFICATES: CollectionSpec(
        model=Certificate,
        defaults={
            "title": "",
            "issuer": "",
            "issue_date": None,
            "credential_id": None,
            "credential_url": None,
            "image_url": None,
            "upload_type": "file",
        },
        choices={"upload_type": frozenset({"file", "link"})},
    ),
    CollectionKind.NOTES: CollectionSpec(
        model=Note,
        defaults={
            "title": "",
            "subject": "",
            "description": "",
            "file_url": "",
            "file_type": "pdf",
        },
    ),
    CollectionKind.RESUMES: CollectionSpec(
        model=Resume,
        defaults={
            "title": "",
            "file_url": "",
            "file_type": "pdf",
            "is_primary": False,
        },
    ),
}


def _get_spec(kind: CollectionKind | str) -> CollectionSpec:
    try:
        return COLLECTIONS[CollectionKind(kind)]
    except ValueError:
        raise ValidationFailedError(f"Unknown collection '{kind}'") from None


def _decode_list(raw: str | None) -> list:
    """Decode a JSON list column, tolerating legacy or malformed values."""
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return decoded if isinstance(decoded, list) else []


def _parse_created_at(value: Any) -> datetime | None:
    """Normalise a creation time to UTC. Naive values are taken as UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    # Capped at now
    return min(value.astimezone(UTC), datetime.now(UTC))


def _prepare_row(spec: CollectionSpec, item: Mapping[str, Any]) -> dict[str, Any]:
    """Fill defaults and coerce one input item into column values.

    A ``created_at`` sent back from an earlier load is kept, so re-saving an
    unchanged list does not make old items look new.
    """
    row: dict[str, Any] = {}
    for name, default in spec.defaults.items():
        value = item.get(name)
        if value is None:
            value = default
        allowed = spec.choices.get(name)
        if allowed is not None and value not in allowed:
            value = default
        if name == "progress":
            value = max(0, min(100, int(value)))
        if name in spec.json_fields:
            value = json.dumps([str(v) for v in value])
        row[name] = value
    created_at = _parse_created_at(item.get("created_at"))
    if created_at is not None:
        row["created_at"] = created_at
    return row


def _row_to_dict(spec: CollectionSpec, row: Base) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": row.id,
        "position": row.position,
        "created_at": row.created_at,
    }
    for name in spec.defaults:
        value = getattr(row, name)
        data[name] = _decode_list(value) if name in spec.json_fields else value
    return data


def save_collection(
    kind: CollectionKind | str, email: str, items: Iterable[Mapping[str, Any]]
) -> list[dict[str, Any]]:
    """Replace a user's collection with ``items``.

    Args:
        kind: Which collection to save.
        email: Owner's email.
        items: Items in display order, keyed by column name.

    Returns:
        The stored items, in order.

    Raises:
        NotFoundError: If no account exists for the email.
        ValidationFailedError: If ``kind`` is unknown.
    """
    spec = _get_spec(kind)
    prepared = [_prepare_row(spec, item) for item in items]

    with get_session() as session:
        user = require_user(session, email)
        model = spec.model
        removed = (
            session.query(model)
            .filter(model.user_id == user.id)
            .delete(synchronize_session=False)
        )
        rows = [
            model(user_id=user.id, position=position, **values)
            for position, values in enumerate(prepared)
        ]
        session.add_all(rows)
        session.flush()
        logger.info(
            "Synced %s for %s: replaced %d with %d",
            CollectionKind(kind).value,
            user.email,
            removed,
            len(rows),
        )
        return [_row_to_dict(spec, row) for row in rows]


def get_collection(kind: CollectionKind | str, email: str) -> list[dict[str, Any]]:
    """Return a user's collection in saved order.

    Raises:
        NotFoundError: If no account exists for the email.
        ValidationFailedError: If ``kind`` is unknown.
    """
    spec = _get_spec(kind)
    with get_session() as session:
        user = require_user(session, email)
        model = spec.model
        rows = (
            session.query(model)
            .filter(model.user_id == user.id)
            .order_by(model.position, model.id)
            .all()
        )
        return [_row_to_dict(spec, row) for row in rows]
