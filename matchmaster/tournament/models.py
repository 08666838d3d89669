"""Data models for the tournament blueprint."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from matchmaster.errors import StoreError
from matchmaster.utils import format_timestamp, parse_timestamp


class TournamentStatus(str, Enum):
    """Lifecycle states of a tournament."""

    DRAFT = "draft"
    REGISTRATION = "registration"
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def from_value(cls, value: Any) -> TournamentStatus:
        """Parse a stored status, treating unknown values as a draft."""
        try:
            return cls(value)
        except ValueError:
            return cls.DRAFT


# Participants may only change while the tournament is in one of these states.
OPEN_STATUSES = frozenset({TournamentStatus.REGISTRATION, TournamentStatus.UPCOMING})

# States that have started or finished play.
STARTED_STATUSES = frozenset({TournamentStatus.ACTIVE, TournamentStatus.COMPLETED})


@dataclass
class Tournament:
    """A tournament record as seen by the participation engine."""

    id: str
    name: str = ""
    status: TournamentStatus = TournamentStatus.DRAFT
    participants: list[str] = field(default_factory=list)
    max_participants: int = 0
    creator_id: Optional[str] = None
    registration_deadline: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @property
    def is_open(self) -> bool:
        """Whether participants may currently join or leave."""
        return self.status in OPEN_STATUSES

    @property
    def is_full(self) -> bool:
        """Whether every seat is taken."""
        return len(self.participants) >= self.max_participants

    def deadline_passed(self, now: datetime.datetime) -> bool:
        """Whether the registration deadline, if any, lies before ``now``."""
        return self.registration_deadline is not None and now > self.registration_deadline

    @classmethod
    def from_dict(cls, doc_id: str, data: dict[str, Any]) -> Tournament:
        """Build a tournament from a stored document.

        Raises StoreError when the capacity is not a number.
        """
        try:
            max_participants = int(data.get("max_participants") or 0)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Tournament {doc_id} has an invalid capacity.") from e
        return cls(
            id=doc_id,
            name=data.get("name") or "",
            status=TournamentStatus.from_value(data.get("status")),
            participants=list(data.get("participants") or []),
            max_participants=max_participants,
            creator_id=data.get("creator_id"),
            registration_deadline=parse_timestamp(data.get("registration_deadline")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise for JSON responses."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "participants": list(self.participants),
            "participants_count": len(self.participants),
            "max_participants": self.max_participants,
            "creator_id": self.creator_id,
            "registration_deadline": format_timestamp(self.registration_deadline),
            "updated_at": format_timestamp(self.updated_at),
        }
