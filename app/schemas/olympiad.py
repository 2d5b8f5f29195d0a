"""Quiz/olympiad schemas."""

from typing import Any

from app.schemas.common import CamelModel


class EntryResponse(CamelModel):
    entry: dict[str, Any]


class EntriesResponse(CamelModel):
    entries: dict[str, Any]


class RegistrationStatusResponse(CamelModel):
    registered: bool


class StandardResponse(CamelModel):
    std: Any


class AttemptStatusResponse(CamelModel):
    can_attempt: bool
    has_paid: bool


class MarksRequest(CamelModel):
    """Score 0..100; validated by the olympiad service."""

    marks: Any = None


class MarksResponse(CamelModel):
    message: str
    marks_updated: bool
    attempt_closed: bool | None = None


class RankResponse(CamelModel):
    rank: int
