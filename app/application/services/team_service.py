"""Participant profile and team registration (users/{uid}).

All writes are field-scoped so a team edit never overwrites payment state
written concurrently by the payment workflow.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import PurePosixPath
from typing import Any

from app.application.collections import PROFILE_IMAGES, USERS, user_path
from app.application.interfaces import IBlobStorage, IDocumentStore
from app.application.services.payment_service import any_paid
from app.domain.enums import PaymentStatus
from app.domain.exceptions import (
    BlobStorageException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.generators import generate_cuid
from app.shared.utils.sanitization import validate_key

logger = logging.getLogger(__name__)


def member_slots(team: dict[str, Any]) -> list[tuple[str, dict[str, Any]]]:
    """(stored key, member) pairs for team.members.

    Keys are the array indexes as stored, so gaps left by removed members
    keep their position; a sparse array comes back from the store as a dict.
    """
    members = team.get("members") or []
    items = members.items() if isinstance(members, dict) else enumerate(members)
    return [(str(key), member) for key, member in items if isinstance(member, dict)]


def build_team(form_details: dict[str, Any], members: list[Any]) -> dict[str, Any]:
    """Map the registration form onto the stored team shape."""
    return {
        "teamName": form_details.get("teamName"),
        "country": form_details.get("country"),
        "competitionTopic": {
            "ageGroup": form_details.get("ageGroup"),
            "topic": form_details.get("topic"),
            "category": form_details.get("category"),
        },
        "mentor": {
            "name": form_details.get("mentorName"),
            "age": form_details.get("mentorAge"),
            "email": form_details.get("mentorEmail"),
            "phone": form_details.get("mentorPhone"),
        },
        "members": members,
    }


class TeamService:
    def __init__(self, store: IDocumentStore, storage: IBlobStorage | None = None) -> None:
        self._store = store
        self._storage = storage

    async def get_user(self, uid: str) -> dict[str, Any]:
        user = await self._store.get(user_path(validate_key(uid, "uid")))
        if user is None:
            raise ResourceNotFoundException("user", uid)
        return user

    async def list_users(self) -> dict[str, Any]:
        users = await self._store.get(USERS)
        if not users:
            raise ResourceNotFoundException("users", USERS)
        return users

    async def register_team(
        self, uid: str, form_details: dict[str, Any], members: list[Any]
    ) -> None:
        """Store the team and mark the registration fee as pending.

        teamRegistered is left to the payment workflow. Once any order is paid
        only the team itself is replaced; the fee state stays as confirmed.
        """
        if not form_details or not members:
            raise ValidationException("Missing team details")
        user = await self.get_user(uid)
        changes: dict[str, Any] = {"team": build_team(form_details, members)}
        if not any_paid(user.get("payments")):
            changes["paymentStatus"] = PaymentStatus.PENDING.value
            changes["amountDue"] = form_details.get("amountDue")
        await self._store.update(user_path(uid), changes)
        logger.info("Team registered for user %s", uid)

    async def team_name_exists(self, team_name: str) -> bool:
        """Case-insensitive match against every registered team name."""
        if not team_name or not team_name.strip():
            raise ValidationException("Team name is required", "teamName")
        wanted = team_name.strip().lower()
        users = await self._store.get(USERS) or {}
        for user in users.values():
            team = user.get("team") if isinstance(user, dict) else None
            name = team.get("teamName") if isinstance(team, dict) else None
            if isinstance(name, str) and name.strip().lower() == wanted:
                return True
        return False

    async def update_team(self, uid: str, mentor: dict[str, Any], members: list[Any]) -> None:
        """Admin edit of mentor and members; the rest of the team is untouched."""
        if not mentor or not members:
            raise ValidationException("Missing mentor or members details")
        await self.get_user(uid)
        await self._store.update(user_path(uid), {"team/mentor": mentor, "team/members": members})

    async def mark_attendance(self, uid: str) -> None:
        await self.get_user(uid)
        await self._store.update(user_path(uid), {"attendance": True})

    async def upload_member_image(
        self,
        uid: str,
        member_name: str,
        data: bytes,
        content_type: str | None,
        filename: str | None = None,
    ) -> str:
        """Store a member's profile image and point the member at it.

        The member's previous image, if any, is deleted after the new one is
        linked. Returns the download URL.
        """
        if not member_name or not data:
            raise ValidationException("memberName and image are required")
        if self._storage is None:
            raise BlobStorageException("storage not configured")
        user = await self.get_user(uid)
        slot = next(
            (
                (key, member)
                for key, member in member_slots(user.get("team") or {})
                if member.get("name") == member_name
            ),
            None,
        )
        if slot is None:
            raise ResourceNotFoundException("team member", member_name)
        key, member = slot
        previous_url = member.get("profileImageUrl")

        content_type = content_type or mimetypes.guess_type(filename or "")[0] or "application/octet-stream"
        suffix = PurePosixPath(filename or "").suffix or mimetypes.guess_extension(content_type) or ""
        object_path = f"{PROFILE_IMAGES}/{uid}/{generate_cuid()}{suffix}"
        url = await self._storage.upload(object_path, data, content_type)
        await self._store.update(
            user_path(uid), {f"team/members/{key}/profileImageUrl": url}
        )

        previous_path = self._storage.object_path_from_url(previous_url) if previous_url else None
        if previous_path and previous_path != object_path:
            try:
                await self._storage.delete(previous_path)
            except BlobStorageException as e:
                logger.warning("Old profile image %s not removed: %s", previous_path, e.message)
        return url
