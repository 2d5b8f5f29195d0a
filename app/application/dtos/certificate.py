"""DTOs for certificate issuance (itemized results)."""

from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import IssueStatus


@dataclass(kw_only=True)
class IssueItem:
    """Outcome of issuing one certificate (one team member, row or participant)."""

    name: str | None
    auth_code: str | None
    status: IssueStatus
    certificate_id: str | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "authCode": self.auth_code,
            "status": self.status.value,
        }
        if self.certificate_id is not None:
            data["certificateId"] = self.certificate_id
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass
class IssuanceResult:
    """Per-item results of a certificate issuance loop."""

    items: list[IssueItem] = field(default_factory=list)

    def add(self, item: IssueItem) -> None:
        self.items.append(item)

    def count(self, status: IssueStatus) -> int:
        return sum(1 for item in self.items if item.status == status)

    @property
    def issued(self) -> int:
        return self.count(IssueStatus.ISSUED)

    @property
    def skipped(self) -> int:
        return self.count(IssueStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(IssueStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "issued": self.issued,
            "skipped": self.skipped,
            "failed": self.failed,
        }
