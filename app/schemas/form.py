"""Event sub-form and campus ambassador schemas."""

from typing import Any

from pydantic import EmailStr

from app.schemas.common import CamelModel


class FormsResponse(CamelModel):
    """Collection dump as [{id, ...fields}]."""

    forms: list[dict[str, Any]]


class FormStatusUpdateRequest(CamelModel):
    """PATCH body for a generic form; only the provided flags are written."""

    is_selected: bool | None = None
    viewed: bool | None = None


class PhoneNumbersResponse(CamelModel):
    phone_numbers: list[Any]


class AmbassadorApplicationRequest(CamelModel):
    """Campus ambassador application; every field is required."""

    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    state: str | None = None
    city: str | None = None
    college: str | None = None
    year_of_study: str | None = None
    degree_program: str | None = None


class AmbassadorUpdateRequest(CamelModel):
    name: str | None = None
    linked_in_link: str | None = None
    place: str | None = None


class AmbassadorResponse(CamelModel):
    id: str
    name: str
    linked_in_link: str
    place: str
    image_url: str


class AmbassadorsResponse(CamelModel):
    ambassadors: dict[str, Any]
