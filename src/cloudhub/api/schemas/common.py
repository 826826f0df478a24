"""Shared Pydantic schemas for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serialising to camelCase while accepting snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(ApiModel):
    """Generic acknowledgement."""

    success: bool = True
    message: str | None = None


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(description="Human-readable error message")
