"""Judging rubric: store a team's marks and their section/overall totals."""

from __future__ import annotations

import logging
from typing import Any

from app.application.collections import user_path
from app.application.interfaces import IDocumentStore
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.sanitization import validate_key

logger = logging.getLogger(__name__)

RUBRIC_SECTIONS = (
    "innovation",
    "technical",
    "applicability",
    "presentation",
    "challenge",
    "designFunctionality",
)
TOTAL_KEY = "Total marks"


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def section_total(section: Any) -> float:
    """Sum a rubric section's criterion scores; non-numeric values count as 0."""
    if not isinstance(section, dict):
        return 0
    total = sum(_number(v) for v in section.values())
    return int(total) if float(total).is_integer() else total


def rubric_totals(marks: dict[str, Any]) -> dict[str, Any]:
    """Return {sectionTotals, overallTotal} for the known rubric sections."""
    section_totals = {name: section_total(marks.get(name)) for name in RUBRIC_SECTIONS}
    overall = sum(section_totals.values())
    return {
        "sectionTotals": section_totals,
        "overallTotal": int(overall) if float(overall).is_integer() else overall,
    }


class JudgingService:
    """Marks live at users/{uid}/marks alongside their computed totals."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def record_marks(self, uid: str, marks: dict[str, Any]) -> dict[str, Any]:
        """Replace the user's marks; the user must already exist."""
        uid = validate_key(uid, "uid")
        if not marks:
            raise ValidationException("No form data provided", "formData")
        if await self._store.get(user_path(uid)) is None:
            raise ResourceNotFoundException("user", uid)
        record = {k: v for k, v in marks.items() if k != TOTAL_KEY}
        record[TOTAL_KEY] = rubric_totals(record)
        await self._store.set(f"{user_path(uid)}/marks", record)
        logger.info("Marks recorded for user %s (total %s)", uid, record[TOTAL_KEY]["overallTotal"])
        return record[TOTAL_KEY]

    async def get_marks(self, uid: str) -> dict[str, Any]:
        marks = await self._store.get(f"{user_path(uid)}/marks")
        if not marks:
            raise ResourceNotFoundException("marks", uid)
        return marks
