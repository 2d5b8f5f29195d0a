"""Event sub-form API: award nominations, session, internship, certification, generic.

Submissions are public and accept any JSON object (or the legacy
{"formData": {...}} envelope). Reading and moderating submissions requires
an admin token.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.v1.dependencies import get_current_admin, get_form_service
from app.application.collections import (
    AWARD_NOMINATIONS,
    CERTIFICATION_FORMS,
    GENERIC_FORMS,
    INTERNSHIP_FORMS,
    SESSION_FORMS,
)
from app.application.services import FormService
from app.domain.exceptions import ResourceNotFoundException
from app.schemas.common import IdResponse, MessageResponse
from app.schemas.form import FormsResponse, FormStatusUpdateRequest

router = APIRouter()

FORM_COLLECTIONS = {
    "award-nominations": AWARD_NOMINATIONS,
    "session": SESSION_FORMS,
    "internship": INTERNSHIP_FORMS,
    "certification": CERTIFICATION_FORMS,
    "generic": GENERIC_FORMS,
}


def _collection(kind: str) -> str:
    try:
        return FORM_COLLECTIONS[kind]
    except KeyError:
        raise ResourceNotFoundException("form type", kind) from None


@router.post("/{kind}", response_model=IdResponse, status_code=201)
async def submit_form(
    kind: str,
    body: dict[str, Any] | None = Body(None),
    forms: FormService = Depends(get_form_service),
):
    form_id = await forms.submit(_collection(kind), body)
    return IdResponse(message="Form submitted successfully", id=form_id)


@router.get("/{kind}", response_model=FormsResponse)
async def list_forms(
    kind: str,
    _: str = Depends(get_current_admin),
    forms: FormService = Depends(get_form_service),
):
    return FormsResponse(forms=await forms.list(_collection(kind)))


@router.patch("/generic/{form_id}", response_model=MessageResponse)
async def update_form_status(
    form_id: str,
    body: FormStatusUpdateRequest,
    _: str = Depends(get_current_admin),
    forms: FormService = Depends(get_form_service),
):
    """Set isSelected and/or viewed on a generic form."""
    await forms.update_status(form_id, body.is_selected, body.viewed)
    return MessageResponse(message="Form updated successfully")


@router.delete("/generic/{form_id}", response_model=MessageResponse)
async def delete_form(
    form_id: str,
    _: str = Depends(get_current_admin),
    forms: FormService = Depends(get_form_service),
):
    await forms.delete(form_id)
    return MessageResponse(message="Form deleted successfully")
