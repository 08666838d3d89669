"""Match records and adjudicated results."""

from .models import GameResult, Match, MatchData, MatchResult, MatchStatus

__all__ = ["GameResult", "Match", "MatchData", "MatchResult", "MatchStatus"]
