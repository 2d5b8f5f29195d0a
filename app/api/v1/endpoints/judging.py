"""Judging API: admins record rubric marks; participants read their result."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.v1.dependencies import (
    get_current_admin,
    get_current_user,
    get_judging_service,
)
from app.application.services import JudgingService
from app.domain.exceptions import ValidationException
from app.schemas.judging import MarksResultResponse, RubricTotalsResponse

router = APIRouter()


@router.post("/marks", response_model=RubricTotalsResponse)
async def record_marks(
    body: dict[str, Any] | None = Body(None),
    _: str = Depends(get_current_admin),
    judging: JudgingService = Depends(get_judging_service),
):
    """Store {uid, <section>: {<criterion>: score}} with computed totals."""
    marks = dict(body or {})
    uid = marks.pop("uid", None)
    if not uid or not isinstance(uid, str):
        raise ValidationException("uid is required", "uid")
    totals = await judging.record_marks(uid, marks)
    return RubricTotalsResponse(
        message="Marks recorded successfully",
        section_totals=totals["sectionTotals"],
        overall_total=totals["overallTotal"],
    )


@router.get("/result", response_model=MarksResultResponse)
async def get_result(
    uid: str = Depends(get_current_user),
    judging: JudgingService = Depends(get_judging_service),
):
    return MarksResultResponse(marks=await judging.get_marks(uid))
