"""Participant profile API: current user, team registration, member images.

All routes act on the caller (token sub); admins edit other users through
/admin/users.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from app.api.v1.dependencies import get_current_user, get_team_service
from app.application.services import TeamService
from app.schemas.common import MessageResponse
from app.schemas.user import (
    ProfileImageResponse,
    TeamNameExistsResponse,
    TeamRegistrationRequest,
    UserResponse,
)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(
    uid: str = Depends(get_current_user),
    teams: TeamService = Depends(get_team_service),
):
    return UserResponse(user=await teams.get_user(uid))


@router.post("/me/team", response_model=MessageResponse)
async def register_team(
    body: TeamRegistrationRequest,
    uid: str = Depends(get_current_user),
    teams: TeamService = Depends(get_team_service),
):
    """Store the team; payment status becomes pending until the fee is confirmed."""
    await teams.register_team(uid, body.form_details or {}, body.team_members or [])
    return MessageResponse(message="Team registered successfully")


@router.get("/team-name-exists", response_model=TeamNameExistsResponse)
async def team_name_exists(
    team_name: str = Query("", alias="teamName"),
    uid: str = Depends(get_current_user),
    teams: TeamService = Depends(get_team_service),
):
    return TeamNameExistsResponse(exists=await teams.team_name_exists(team_name))


@router.post("/me/members/profile-image", response_model=ProfileImageResponse)
async def upload_member_image(
    member_name: str = Form("", alias="memberName"),
    image: UploadFile = File(...),
    uid: str = Depends(get_current_user),
    teams: TeamService = Depends(get_team_service),
):
    """Upload a member photo; the member's previous photo is removed."""
    data = await image.read()
    url = await teams.upload_member_image(
        uid, member_name, data, image.content_type, image.filename
    )
    return ProfileImageResponse(message="Image uploaded successfully", download_url=url)
