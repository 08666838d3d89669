"""Firestore implementation of the entity store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from matchmaster.auth.models import UserProfile
from matchmaster.core.constants import (
    MATCHES_COLLECTION,
    TOURNAMENTS_COLLECTION,
    USERS_COLLECTION,
)
from matchmaster.errors import ConflictError, NotFoundError, StoreError
from matchmaster.match.models import Match
from matchmaster.tournament.models import Tournament

from .base import EntityStore

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


class FirestoreEntityStore(EntityStore):
    """Entity store backed by Firestore documents.

    The version token of a tournament is the snapshot's ``update_time``; the
    conditional write uses ``write_option(last_update_time=...)`` so the
    server rejects it with ``FailedPrecondition`` if anyone wrote in between.
    """

    def __init__(self, db: Client | None = None) -> None:
        self._db = db

    @property
    def db(self) -> Client:
        if self._db is None:
            self._db = firestore.client()
        return self._db

    def _get(self, collection: str, doc_id: str, label: str) -> DocumentSnapshot:
        try:
            doc = cast(Any, self.db.collection(collection).document(doc_id).get())
        except google_exceptions.GoogleAPIError as e:
            raise StoreError() from e
        if not doc.exists:
            raise NotFoundError(f"{label} not found.")
        return doc

    def get_tournament(self, tournament_id: str) -> tuple[Tournament, Any]:
        doc = self._get(TOURNAMENTS_COLLECTION, tournament_id, "Tournament")
        return Tournament.from_dict(doc.id, doc.to_dict() or {}), doc.update_time

    def update_tournament_participants(
        self, tournament_id: str, participants: list[str], expected_version: Any
    ) -> Tournament:
        ref = self.db.collection(TOURNAMENTS_COLLECTION).document(tournament_id)
        try:
            ref.update(
                {
                    "participants": list(participants),
                    "updated_at": firestore.SERVER_TIMESTAMP,
                },
                option=self.db.write_option(last_update_time=expected_version),
            )
        except google_exceptions.FailedPrecondition as e:
            logger.warning(f"Stale write rejected for tournament {tournament_id}")
            raise ConflictError() from e
        except google_exceptions.NotFound as e:
            raise NotFoundError("Tournament not found.") from e
        except google_exceptions.GoogleAPIError as e:
            raise StoreError() from e

        tournament, _ = self.get_tournament(tournament_id)
        return tournament

    def get_match(self, match_id: str) -> Match:
        doc = self._get(MATCHES_COLLECTION, match_id, "Match")
        return Match.from_dict(doc.id, doc.to_dict() or {})

    def update_match_result(self, match_id: str, fields: dict[str, Any]) -> Match:
        ref = self.db.collection(MATCHES_COLLECTION).document(match_id)
        try:
            ref.update({**fields, "updated_at": firestore.SERVER_TIMESTAMP})
        except google_exceptions.NotFound as e:
            raise NotFoundError("Match not found.") from e
        except google_exceptions.GoogleAPIError as e:
            raise StoreError() from e
        return self.get_match(match_id)

    def get_user(self, user_id: str) -> UserProfile | None:
        try:
            doc = cast(Any, self.db.collection(USERS_COLLECTION).document(user_id).get())
        except google_exceptions.GoogleAPIError as e:
            raise StoreError() from e
        if not doc.exists:
            return None
        return UserProfile.from_dict(doc.id, doc.to_dict() or {})
