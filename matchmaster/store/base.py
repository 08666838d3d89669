"""Entity store contract consumed by the participation and adjudication services."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from matchmaster.auth.models import UserProfile
    from matchmaster.match.models import Match
    from matchmaster.tournament.models import Tournament


class EntityStore(abc.ABC):
    """Reads and guarded writes against tournament, match and user records.

    ``get_tournament`` returns an opaque version token alongside the record.
    ``update_tournament_participants`` only succeeds while the stored record
    still carries that token; otherwise it raises ``ConflictError`` and
    writes nothing. Implementations stamp ``updated_at`` on every write.
    """

    @abc.abstractmethod
    def get_tournament(self, tournament_id: str) -> tuple[Tournament, Any]:
        """Return the tournament and its version token, or raise NotFoundError."""

    @abc.abstractmethod
    def update_tournament_participants(
        self, tournament_id: str, participants: list[str], expected_version: Any
    ) -> Tournament:
        """Replace the participant list if the version is unchanged.

        Raises ConflictError on a version mismatch and NotFoundError when the
        tournament no longer exists.
        """

    @abc.abstractmethod
    def get_match(self, match_id: str) -> Match:
        """Return the match, or raise NotFoundError."""

    @abc.abstractmethod
    def update_match_result(self, match_id: str, fields: dict[str, Any]) -> Match:
        """Unconditionally write result fields, or raise NotFoundError."""

    @abc.abstractmethod
    def get_user(self, user_id: str) -> UserProfile | None:
        """Return the stored user profile, if any."""
