"""Team certificate issuance after a confirmed payment.

One certificate of type "tm" per team member that has both a name and an
auth code. Members are handled independently: a skipped or failed member
never aborts the rest of the team.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from app.application.collections import CERTIFICATES
from app.application.dtos.certificate import IssuanceResult, IssueItem
from app.application.interfaces import IDocumentStore
from app.domain.enums import CertificateType, IssueStatus
from app.domain.exceptions import DocumentStoreException

logger = logging.getLogger(__name__)

# Trailing age range, e.g. "Robotics 13 to 18".
_AGE_RANGE_SUFFIX = re.compile(r"(?: \d{1,2} to \d{1,2})$")


def clean_topic(topic: str | None) -> str:
    """Strip trailing " <n> to <m>" age ranges and surrounding whitespace.

    Repeats until nothing changes, so clean_topic(clean_topic(x)) == clean_topic(x).
    """
    cleaned = (topic or "").strip()
    while True:
        stripped = _AGE_RANGE_SUFFIX.sub("", cleaned).strip()
        if stripped == cleaned:
            return cleaned
        cleaned = stripped


def existing_auth_codes(certificates: dict[str, Any] | None) -> set[str]:
    """Auth codes already present in the certificates collection."""
    if not certificates:
        return set()
    return {
        str(record["authCode"])
        for record in certificates.values()
        if isinstance(record, dict) and record.get("authCode")
    }


def team_members(team: dict[str, Any]) -> list[dict[str, Any]]:
    """Members as a list; the store returns sparse arrays as dicts keyed by index."""
    members = team.get("members") or []
    if isinstance(members, dict):
        members = [v for _, v in sorted(members.items(), key=lambda kv: int(kv[0]))]
    return [m for m in members if isinstance(m, dict)]


class TeamCertificateIssuer:
    """Creates team member certificates from a user record."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def issue_for_user(self, uid: str, user: dict[str, Any]) -> IssuanceResult:
        result = IssuanceResult()
        team = user.get("team") or {}
        members = team_members(team)
        if not members:
            logger.warning("No team members to certify for user %s", uid)
            return result

        team_name = team.get("teamName", "")
        topic = clean_topic((team.get("competitionTopic") or {}).get("topic"))

        try:
            issued_codes = existing_auth_codes(await self._store.get(CERTIFICATES))
        except DocumentStoreException as e:
            logger.error("Could not read certificates for user %s: %s", uid, e.message)
            for member in members:
                result.add(
                    IssueItem(
                        name=member.get("name"),
                        auth_code=member.get("authCode"),
                        status=IssueStatus.FAILED,
                        reason="certificate lookup failed",
                    )
                )
            return result

        for member in members:
            name = member.get("name")
            if isinstance(name, str):
                name = name.strip()
            auth_code = member.get("authCode")
            if not name or not auth_code:
                logger.info("Skipping member without name or authCode for user %s: %s", uid, member)
                result.add(
                    IssueItem(
                        name=name or None,
                        auth_code=auth_code or None,
                        status=IssueStatus.SKIPPED,
                        reason="missing name or authCode",
                    )
                )
                continue
            auth_code = str(auth_code)
            if auth_code in issued_codes:
                logger.info("Certificate with authCode %s already exists; skipping", auth_code)
                result.add(
                    IssueItem(
                        name=name,
                        auth_code=auth_code,
                        status=IssueStatus.SKIPPED,
                        reason="authCode already issued",
                    )
                )
                continue
            try:
                certificate_id = await self._store.push(
                    CERTIFICATES,
                    {
                        "teamName": team_name,
                        "topic": topic,
                        "name": name,
                        "authCode": auth_code,
                        "type": CertificateType.TEAM_MEMBER.value,
                    },
                )
            except DocumentStoreException as e:
                logger.error("Certificate for %s (user %s) failed: %s", name, uid, e.message)
                result.add(
                    IssueItem(
                        name=name,
                        auth_code=auth_code,
                        status=IssueStatus.FAILED,
                        reason=e.message,
                    )
                )
                continue
            issued_codes.add(auth_code)
            logger.info("Certificate generated for %s", name)
            result.add(
                IssueItem(
                    name=name,
                    auth_code=auth_code,
                    status=IssueStatus.ISSUED,
                    certificate_id=certificate_id,
                )
            )
        return result
