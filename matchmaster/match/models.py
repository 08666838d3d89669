"""Data models for matches and adjudicated results."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from matchmaster.errors import InvalidInputError
from matchmaster.utils import format_timestamp, is_blank, parse_timestamp


class MatchStatus(str, Enum):
    """Lifecycle states of a match."""

    SCHEDULED = "scheduled"
    READY = "ready"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DISPUTED = "disputed"


def _is_score(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class GameResult:
    """Outcome of a single game within a match."""

    game_number: Any
    score_a: Any
    score_b: Any
    winner_id: Any
    duration: Any = None
    map: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> GameResult:
        """Build a game result from a request payload."""
        if not isinstance(data, dict):
            raise InvalidInputError("Each game result must be an object.")
        return cls(
            game_number=data.get("game_number"),
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            winner_id=data.get("winner_id"),
            duration=data.get("duration"),
            map=data.get("map"),
        )

    def validate(self) -> None:
        """Check field types; raises InvalidInputError."""
        if not isinstance(self.game_number, int) or isinstance(self.game_number, bool):
            raise InvalidInputError("Game number must be an integer.")
        if not _is_score(self.score_a) or not _is_score(self.score_b):
            raise InvalidInputError(
                f"Game {self.game_number} scores must be non-negative integers."
            )
        if is_blank(self.winner_id):
            raise InvalidInputError(f"Game {self.game_number} is missing a winner.")
        if self.duration is not None and (
            not _is_number(self.duration) or self.duration < 0
        ):
            raise InvalidInputError(
                f"Game {self.game_number} duration must be a non-negative number."
            )
        if self.map is not None and not isinstance(self.map, str):
            raise InvalidInputError(f"Game {self.game_number} map must be a string.")

    def to_dict(self) -> dict[str, Any]:
        data = {
            "game_number": self.game_number,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "winner_id": self.winner_id,
        }
        if self.duration is not None:
            data["duration"] = self.duration
        if self.map is not None:
            data["map"] = self.map
        return data


@dataclass
class MatchData:
    """Structured detail attached to a result: per-game results, MVP and notes."""

    game_results: list[GameResult] = field(default_factory=list)
    mvp_id: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> MatchData:
        """Build match data from a request payload."""
        if not isinstance(data, dict):
            raise InvalidInputError("Match data must be an object.")
        games = data.get("game_results") or []
        if not isinstance(games, list):
            raise InvalidInputError("Game results must be a list.")
        return cls(
            game_results=[GameResult.from_dict(g) for g in games],
            mvp_id=data.get("mvp_id"),
            notes=data.get("notes"),
        )

    def validate(self) -> None:
        for game in self.game_results:
            game.validate()
        numbers = [g.game_number for g in self.game_results]
        if len(numbers) != len(set(numbers)):
            raise InvalidInputError("Game numbers must be unique.")
        if self.mvp_id is not None and is_blank(self.mvp_id):
            raise InvalidInputError("MVP must be a user id.")
        if self.notes is not None and not isinstance(self.notes, str):
            raise InvalidInputError("Notes must be text.")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "game_results": [g.to_dict() for g in self.game_results]
        }
        if self.mvp_id is not None:
            data["mvp_id"] = self.mvp_id
        if self.notes is not None:
            data["notes"] = self.notes
        return data


@dataclass
class MatchResult:
    """A result submitted for adjudication."""

    score_a: Any
    score_b: Any
    winner_id: Any
    match_data: Optional[MatchData] = None

    @classmethod
    def from_dict(cls, data: Any) -> MatchResult:
        """Build a result from a request payload; raises InvalidInputError."""
        if not isinstance(data, dict):
            raise InvalidInputError("Invalid result data.")
        raw_match_data = data.get("match_data")
        return cls(
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            winner_id=data.get("winner_id"),
            match_data=(
                MatchData.from_dict(raw_match_data)
                if raw_match_data is not None
                else None
            ),
        )

    def validate(self) -> None:
        """Validate the result on its own, without looking at the match."""
        if not _is_score(self.score_a) or not _is_score(self.score_b):
            raise InvalidInputError("Scores must be non-negative integers.")
        if is_blank(self.winner_id):
            raise InvalidInputError("A winner is required.")
        if self.match_data is not None:
            self.match_data.validate()

    def check_against(self, match: Match) -> None:
        """Validate the result against the match it is recorded for."""
        participants = {match.participant_a_id, match.participant_b_id}
        if self.winner_id not in participants:
            raise InvalidInputError("Winner must be one of the match participants.")
        if self.match_data is None or not self.match_data.game_results:
            return

        games = self.match_data.game_results
        for game in games:
            if game.winner_id not in participants:
                raise InvalidInputError(
                    f"Game {game.game_number} winner must be a match participant."
                )
        wins_a = sum(1 for g in games if g.winner_id == match.participant_a_id)
        wins_b = sum(1 for g in games if g.winner_id == match.participant_b_id)
        if (wins_a, wins_b) != (self.score_a, self.score_b):
            raise InvalidInputError(
                "Scores do not match the recorded game results "
                f"({wins_a}-{wins_b})."
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "score_a": self.score_a,
            "score_b": self.score_b,
            "winner_id": self.winner_id,
            "match_data": self.match_data.to_dict() if self.match_data else None,
        }


@dataclass
class Match:
    """A match record."""

    id: str
    tournament_id: Optional[str]
    participant_a_id: Optional[str]
    participant_b_id: Optional[str]
    status: str = MatchStatus.SCHEDULED.value
    score_a: Optional[int] = None
    score_b: Optional[int] = None
    winner_id: Optional[str] = None
    match_data: Optional[dict[str, Any]] = None
    completed_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    def from_dict(cls, doc_id: str, data: dict[str, Any]) -> Match:
        """Build a match from a stored document."""
        return cls(
            id=doc_id,
            tournament_id=data.get("tournament_id"),
            participant_a_id=data.get("participant_a_id"),
            participant_b_id=data.get("participant_b_id"),
            status=data.get("status") or MatchStatus.SCHEDULED.value,
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            winner_id=data.get("winner_id"),
            match_data=data.get("match_data"),
            completed_at=parse_timestamp(data.get("completed_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise for JSON responses."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "participant_a_id": self.participant_a_id,
            "participant_b_id": self.participant_b_id,
            "status": self.status,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "winner_id": self.winner_id,
            "match_data": self.match_data,
            "completed_at": format_timestamp(self.completed_at),
            "updated_at": format_timestamp(self.updated_at),
        }
