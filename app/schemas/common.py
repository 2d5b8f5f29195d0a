"""Shared schema base and small response bodies.

The public API speaks camelCase; models declare snake_case fields and
accept/emit the camelCase alias.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request/response bodies with camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    message: str


class IdResponse(CamelModel):
    """Response for create endpoints that return the generated key."""

    message: str
    id: str


class IssueItemResponse(CamelModel):
    name: str | None = None
    auth_code: str | None = None
    status: str
    certificate_id: str | None = None
    reason: str | None = None


class IssuanceResponse(CamelModel):
    """Itemized result of a certificate issuance loop."""

    items: list[IssueItemResponse] = Field(default_factory=list)
    issued: int = 0
    skipped: int = 0
    failed: int = 0


class RecordResponse(CamelModel):
    """Single stored record (arbitrary JSON object)."""

    data: dict[str, Any]
