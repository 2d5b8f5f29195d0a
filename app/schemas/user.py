"""Participant profile and team schemas."""

from typing import Any

from pydantic import Field

from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Response for GET /users/me and GET /admin/users/{uid}."""

    user: dict[str, Any]


class UsersResponse(CamelModel):
    users: dict[str, Any]


class TeamRegistrationRequest(CamelModel):
    """Request body for POST /users/me/team.

    formDetails carries teamName, country, ageGroup, topic, category,
    mentor* fields and amountDue; teamMembers is the member list.
    """

    form_details: dict[str, Any] | None = None
    team_members: list[Any] | None = None


class TeamUpdateRequest(CamelModel):
    """Request body for PUT /admin/users/{uid}/team."""

    mentor: dict[str, Any] | None = None
    members: list[Any] | None = None


class TeamNameExistsResponse(CamelModel):
    exists: bool


class ProfileImageResponse(CamelModel):
    message: str
    download_url: str = Field(..., alias="downloadURL")
