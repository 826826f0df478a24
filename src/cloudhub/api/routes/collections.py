"""Routes for the per-user collections.

Each collection exposes the same pair of endpoints:

    GET  /<collection>/{email}   list in saved order
    POST /<collection>/{email}   replace the whole list with the request body

The POST body is a JSON array. Sending ``[]`` clears the collection.
"""

# Annotations are evaluated eagerly here: the route signatures below use
# the item model bound inside _register.

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from cloudhub.api.dependencies import require_owner
from cloudhub.api.schemas.collections import (
    CertificateItem,
    CertificateResponse,
    NoteItem,
    NoteResponse,
    ProjectItem,
    ProjectResponse,
    ResumeItem,
    ResumeResponse,
    SaveCollectionResponse,
)
from cloudhub.api.schemas.common import ApiModel
from cloudhub.constants import CollectionKind
from cloudhub.services.collections import get_collection, save_collection

router = APIRouter(tags=["collections"])


def _register(
    kind: CollectionKind,
    item_model: type[ApiModel],
    response_model: type[ApiModel],
) -> None:
    """Add the list and save endpoints for one collection to ``router``."""
    label = kind.value

    def list_items(email: Annotated[str, Depends(require_owner)]) -> list[dict[str, Any]]:
        return get_collection(kind, email)

    def save_items(
        email: Annotated[str, Depends(require_owner)],
        items: Annotated[list[item_model], Body(description=f"Complete list of {label}")],  # type: ignore[valid-type]
    ) -> SaveCollectionResponse:
        stored = save_collection(kind, email, [item.model_dump(exclude_none=True) for item in items])
        return SaveCollectionResponse(count=len(stored))

    list_items.__doc__ = f"List the user's {label} in saved order."
    save_items.__doc__ = f"Replace the user's {label} with the given list."

    router.add_api_route(
        f"/{label}/{{email}}",
        list_items,
        methods=["GET"],
        response_model=list[response_model],  # type: ignore[valid-type]
        name=f"list_{label}",
    )
    router.add_api_route(
        f"/{label}/{{email}}",
        save_items,
        methods=["POST"],
        response_model=SaveCollectionResponse,
        name=f"save_{label}",
    )


_register(CollectionKind.PROJECTS, ProjectItem, ProjectResponse)
_register(CollectionKind.CERTIFICATES, CertificateItem, CertificateResponse)
_register(CollectionKind.NOTES, NoteItem, NoteResponse)
_register(CollectionKind.RESUMES, ResumeItem, ResumeResponse)
