"""Judging rubric schemas."""

from typing import Any

from app.schemas.common import CamelModel


class RubricTotalsResponse(CamelModel):
    message: str
    section_totals: dict[str, int | float]
    overall_total: int | float


class MarksResultResponse(CamelModel):
    marks: dict[str, Any]
