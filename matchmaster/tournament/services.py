"""Service layer for tournament participation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from matchmaster.errors import (
    AlreadyRegisteredError,
    InvalidInputError,
    InvalidStateError,
    NotRegisteredError,
    TournamentFullError,
)
from matchmaster.utils import is_blank, utcnow

from .models import STARTED_STATUSES, Tournament

if TYPE_CHECKING:
    import datetime

    from matchmaster.store.base import EntityStore

logger = logging.getLogger(__name__)


class ParticipationService:
    """Handles join and leave on a tournament's participant list.

    Every mutation is read, validate, then a conditional write keyed on the
    version token from the read. A lost race raises ConflictError and the
    caller decides whether to retry with a fresh read.
    """

    def __init__(
        self,
        store: EntityStore,
        clock: Callable[[], datetime.datetime] = utcnow,
    ) -> None:
        self._store = store
        self._clock = clock

    @staticmethod
    def _require_ids(tournament_id: str, user_id: str) -> None:
        if is_blank(tournament_id) or is_blank(user_id):
            raise InvalidInputError("Tournament ID and user ID are required.")

    def get_tournament(self, tournament_id: str) -> Tournament:
        """Fetch a tournament without its version token."""
        if is_blank(tournament_id):
            raise InvalidInputError("Tournament ID is required.")
        tournament, _ = self._store.get_tournament(tournament_id)
        return tournament

    def join(self, tournament_id: str, user_id: str) -> Tournament:
        """Register ``user_id`` for the tournament and return the updated record."""
        self._require_ids(tournament_id, user_id)
        tournament, version = self._store.get_tournament(tournament_id)

        if not tournament.is_open:
            raise InvalidStateError("Tournament is not open for registration.")
        if tournament.deadline_passed(self._clock()):
            raise InvalidStateError("Registration deadline has passed.")
        if user_id in tournament.participants:
            raise AlreadyRegisteredError()
        if tournament.is_full:
            raise TournamentFullError()

        updated = self._store.update_tournament_participants(
            tournament_id, [*tournament.participants, user_id], version
        )
        logger.info(f"User {user_id} joined tournament {tournament_id}")
        return updated

    def leave(self, tournament_id: str, user_id: str) -> Tournament:
        """Withdraw ``user_id`` from the tournament and return the updated record."""
        self._require_ids(tournament_id, user_id)
        tournament, version = self._store.get_tournament(tournament_id)

        if tournament.status in STARTED_STATUSES:
            raise InvalidStateError("Cannot leave an active or completed tournament.")
        if not tournament.is_open:
            raise InvalidStateError(
                f"Participants cannot change while the tournament is "
                f"{tournament.status.value}."
            )
        if user_id not in tournament.participants:
            raise NotRegisteredError()

        remaining = [pid for pid in tournament.participants if pid != user_id]
        updated = self._store.update_tournament_participants(
            tournament_id, remaining, version
        )
        logger.info(f"User {user_id} left tournament {tournament_id}")
        return updated
