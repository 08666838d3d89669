"""In-process entity store for local runs and tests."""

from __future__ import annotations

import copy
import threading
from typing import Any

from matchmaster.auth.models import UserProfile
from matchmaster.errors import ConflictError, NotFoundError
from matchmaster.match.models import Match
from matchmaster.tournament.models import Tournament
from matchmaster.utils import utcnow

from .base import EntityStore


class MemoryEntityStore(EntityStore):
    """Dict-backed store with an integer version per tournament.

    A single lock makes each read and each compare-and-swap atomic; it is
    never held across a service call.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tournaments: dict[str, dict[str, Any]] = {}
        self._versions: dict[str, int] = {}
        self._matches: dict[str, dict[str, Any]] = {}
        self._users: dict[str, dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def put_tournament(self, tournament_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._tournaments[tournament_id] = copy.deepcopy(data)
            self._versions[tournament_id] = self._versions.get(tournament_id, 0) + 1

    def put_match(self, match_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._matches[match_id] = copy.deepcopy(data)

    def put_user(self, user_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._users[user_id] = copy.deepcopy(data)

    # ------------------------------------------------------------------
    # EntityStore
    # ------------------------------------------------------------------

    def get_tournament(self, tournament_id: str) -> tuple[Tournament, Any]:
        with self._lock:
            data = self._tournaments.get(tournament_id)
            if data is None:
                raise NotFoundError("Tournament not found.")
            return (
                Tournament.from_dict(tournament_id, copy.deepcopy(data)),
                self._versions[tournament_id],
            )

    def update_tournament_participants(
        self, tournament_id: str, participants: list[str], expected_version: Any
    ) -> Tournament:
        with self._lock:
            data = self._tournaments.get(tournament_id)
            if data is None:
                raise NotFoundError("Tournament not found.")
            if self._versions[tournament_id] != expected_version:
                raise ConflictError()
            data["participants"] = list(participants)
            data["updated_at"] = utcnow()
            self._versions[tournament_id] += 1
            return Tournament.from_dict(tournament_id, copy.deepcopy(data))

    def get_match(self, match_id: str) -> Match:
        with self._lock:
            data = self._matches.get(match_id)
            if data is None:
                raise NotFoundError("Match not found.")
            return Match.from_dict(match_id, copy.deepcopy(data))

    def update_match_result(self, match_id: str, fields: dict[str, Any]) -> Match:
        with self._lock:
            data = self._matches.get(match_id)
            if data is None:
                raise NotFoundError("Match not found.")
            data.update(copy.deepcopy(fields))
            data["updated_at"] = utcnow()
            return Match.from_dict(match_id, copy.deepcopy(data))

    def get_user(self, user_id: str) -> UserProfile | None:
        with self._lock:
            data = self._users.get(user_id)
            if data is None:
                return None
            return UserProfile.from_dict(user_id, copy.deepcopy(data))
