"""Data models for the administrative audit trail."""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from matchmaster.utils import format_timestamp, parse_timestamp


class AdminAction(str, Enum):
    """Administrative actions recorded in the audit trail."""

    BAN_USER = "ban_user"
    UNBAN_USER = "unban_user"
    OVERRIDE_MATCH = "override_match"
    DELETE_TOURNAMENT = "delete_tournament"
    EDIT_TOURNAMENT = "edit_tournament"
    ASSIGN_ROLE = "assign_role"
    REVOKE_ROLE = "revoke_role"


class TargetType(str, Enum):
    """Kinds of records an administrative action can target."""

    USER = "user"
    TOURNAMENT = "tournament"
    MATCH = "match"
    CLAN = "clan"


@dataclass(frozen=True)
class AdminLogEntry:
    """An immutable audit record of one administrative action."""

    action: AdminAction
    target_type: TargetType
    target_id: str
    admin_id: str
    admin_name: str
    timestamp: datetime.datetime
    reason: Optional[str] = None
    target_name: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def to_document(self) -> dict[str, Any]:
        """Fields as written to the store."""
        return {
            "action": self.action.value,
            "target_type": self.target_type.value,
            "target_id": self.target_id,
            "target_name": self.target_name,
            "admin_id": self.admin_id,
            "admin_name": self.admin_name,
            "reason": self.reason,
            "details": self.details,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> AdminLogEntry:
        return cls(
            id=doc_id,
            action=AdminAction(data["action"]),
            target_type=TargetType(data["target_type"]),
            target_id=data.get("target_id") or "",
            target_name=data.get("target_name"),
            admin_id=data.get("admin_id") or "",
            admin_name=data.get("admin_name") or "",
            reason=data.get("reason"),
            details=dict(data.get("details") or {}),
            timestamp=parse_timestamp(data.get("timestamp"))
            or datetime.datetime.min.replace(tzinfo=datetime.timezone.utc),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise for JSON responses."""
        data = self.to_document()
        data["id"] = self.id
        data["timestamp"] = format_timestamp(self.timestamp)
        return data

    def matches_search(self, term: str) -> bool:
        """Case-insensitive match on target name, admin name or reason."""
        needle = term.lower()
        return any(
            needle in (value or "").lower()
            for value in (self.target_name, self.admin_name, self.reason)
        )


@dataclass
class AdminLogFilters:
    """Filters for browsing the audit trail."""

    date_from: Optional[datetime.datetime] = None
    date_to: Optional[datetime.datetime] = None
    search: Optional[str] = None
    action: Optional[AdminAction] = None


@dataclass
class AdminLogPage:
    """One page of audit entries, newest first."""

    entries: list[AdminLogEntry]
    count: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.count / self.limit) if self.limit else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [entry.to_dict() for entry in self.entries],
            "count": self.count,
            "page": self.page,
            "limit": self.limit,
            "total_pages": self.total_pages,
        }
