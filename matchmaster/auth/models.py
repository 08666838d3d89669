"""Identity types used by the access control gate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Role(str, Enum):
    """Platform roles, most privileged first."""

    ADMIN = "admin"
    ORGANIZER = "organizer"
    LEADER = "leader"
    PLAYER = "player"


# Roles allowed to adjudicate match results.
ELEVATED_ROLES = frozenset({Role.ADMIN, Role.ORGANIZER})


@dataclass(frozen=True)
class CallerIdentity:
    """A verified caller, resolved fresh for every request."""

    user_id: str
    role: Role
    display_name: Optional[str] = None


@dataclass
class UserProfile:
    """The stored user record consulted when resolving a caller's role."""

    id: str
    role: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_dict(cls, doc_id: str, data: dict[str, Any]) -> UserProfile:
        role = data.get("role")
        if not role and data.get("isAdmin"):
            role = Role.ADMIN.value
        return cls(
            id=doc_id,
            role=role,
            display_name=data.get("display_name") or data.get("name"),
        )
