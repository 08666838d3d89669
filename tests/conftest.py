"""Shared test helpers: mockfirestore patches, fake identities and seed data."""

from __future__ import annotations

import datetime
from types import SimpleNamespace
from typing import Any, Optional

from mockfirestore import CollectionReference, Query

from matchmaster.auth.gate import IdentityProvider
from matchmaster.auth.models import CallerIdentity, Role
from matchmaster.errors import UnauthenticatedError

ADMIN = CallerIdentity(user_id="admin_uid", role=Role.ADMIN, display_name="Admin User")
ORGANIZER = CallerIdentity(
    user_id="organizer_uid", role=Role.ORGANIZER, display_name="Org User"
)
LEADER = CallerIdentity(user_id="leader_uid", role=Role.LEADER, display_name="Leader")
PLAYER = CallerIdentity(user_id="player_uid", role=Role.PLAYER, display_name="Player")

FIXED_NOW = datetime.datetime(2026, 5, 1, 12, 0, tzinfo=datetime.timezone.utc)


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and count()."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    def count(self: Any, alias: Optional[str] = None) -> Any:
        return _CountAggregation(self, alias)

    for cls in (CollectionReference, Query):
        if not hasattr(cls, "count"):
            cls.count = count


class _CountAggregation:
    """Stand-in for Firestore's ``count()`` aggregation query."""

    def __init__(self, query: Any, alias: Optional[str]) -> None:
        self.query = query
        self.alias = alias

    def get(self) -> list[list[Any]]:
        total = sum(1 for _ in self.query.stream())
        return [[SimpleNamespace(alias=self.alias, value=total)]]


class StaticIdentityProvider(IdentityProvider):
    """Maps fixed tokens to identities."""

    def __init__(self, identities: dict[str, CallerIdentity]) -> None:
        self.identities = identities
        self.calls: list[str] = []

    def resolve(self, token: str) -> CallerIdentity:
        self.calls.append(token)
        try:
            return self.identities[token]
        except KeyError:
            raise UnauthenticatedError() from None


def tournament_doc(**overrides: Any) -> dict[str, Any]:
    """A tournament document open for registration."""
    data = {
        "name": "Spring Cup",
        "status": "registration",
        "participants": [],
        "max_participants": 2,
        "creator_id": "organizer_uid",
    }
    data.update(overrides)
    return data


def match_doc(**overrides: Any) -> dict[str, Any]:
    """A scheduled match between participants A and B."""
    data = {
        "tournament_id": "t1",
        "participant_a_id": "A",
        "participant_b_id": "B",
        "status": "active",
        "score_a": None,
        "score_b": None,
        "winner_id": None,
        "match_data": None,
    }
    data.update(overrides)
    return data
