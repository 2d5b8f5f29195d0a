"""Public campus ambassador application form."""

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_form_service
from app.application.services import FormService
from app.schemas.common import IdResponse
from app.schemas.form import AmbassadorApplicationRequest

router = APIRouter()


@router.post("", response_model=IdResponse, status_code=201)
async def submit_application(
    body: AmbassadorApplicationRequest,
    forms: FormService = Depends(get_form_service),
):
    """Store the application; every field is required."""
    application_id = await forms.submit_ambassador_application(body.model_dump(by_alias=True))
    return IdResponse(message="Application submitted successfully", id=application_id)
