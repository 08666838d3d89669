"""Append-only audit log sinks."""

from __future__ import annotations

import abc
import dataclasses
import threading
import uuid
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from matchmaster.core.constants import ADMIN_LOGS_COLLECTION
from matchmaster.errors import AuditWriteError, StoreError

from .models import AdminLogEntry, AdminLogFilters, AdminLogPage

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class AuditLog(abc.ABC):
    """Append-only sink for administrative actions.

    Entries are never updated or deleted through this interface.
    """

    @abc.abstractmethod
    def append(self, entry: AdminLogEntry) -> AdminLogEntry:
        """Persist an entry and return it with its id; raises AuditWriteError."""

    @abc.abstractmethod
    def _query(self, filters: AdminLogFilters) -> Iterable[AdminLogEntry]:
        """Yield entries inside the date range, newest first."""

    def list_entries(
        self, filters: AdminLogFilters, page: int = 1, limit: int = 50
    ) -> AdminLogPage:
        """Return one page of entries matching ``filters``."""
        selected = [
            entry
            for entry in self._query(filters)
            if (filters.action is None or entry.action == filters.action)
            and (not filters.search or entry.matches_search(filters.search))
        ]
        offset = (page - 1) * limit
        return AdminLogPage(
            entries=selected[offset : offset + limit],
            count=len(selected),
            page=page,
            limit=limit,
        )


class FirestoreAuditLog(AuditLog):
    """Audit log stored in the ``admin_logs`` collection."""

    def __init__(self, db: Client | None = None) -> None:
        self._db = db

    @property
    def db(self) -> Client:
        if self._db is None:
            self._db = firestore.client()
        return self._db

    def append(self, entry: AdminLogEntry) -> AdminLogEntry:
        try:
            _, ref = self.db.collection(ADMIN_LOGS_COLLECTION).add(entry.to_document())
        except Exception as e:
            raise AuditWriteError(f"Failed to log admin action: {e}") from e
        return dataclasses.replace(entry, id=ref.id)

    def _filtered(self, filters: AdminLogFilters) -> Any:
        query = self.db.collection(ADMIN_LOGS_COLLECTION)
        if filters.date_from:
            query = query.where(
                filter=firestore.FieldFilter("timestamp", ">=", filters.date_from)
            )
        if filters.date_to:
            query = query.where(
                filter=firestore.FieldFilter("timestamp", "<=", filters.date_to)
            )
        if filters.action:
            query = query.where(
                filter=firestore.FieldFilter("action", "==", filters.action.value)
            )
        return query

    def list_entries(
        self, filters: AdminLogFilters, page: int = 1, limit: int = 50
    ) -> AdminLogPage:
        # Firestore has no substring match, so free-text search scans the range.
        if filters.search:
            return super().list_entries(filters, page, limit)

        query = self._filtered(filters)
        try:
            count = query.count(alias="all").get()[0][0].value
            docs = list(
                query.order_by("timestamp", direction=firestore.Query.DESCENDING)
                .offset((page - 1) * limit)
                .limit(limit)
                .stream()
            )
        except google_exceptions.GoogleAPIError as e:
            raise StoreError() from e
        return AdminLogPage(
            entries=[
                AdminLogEntry.from_document(doc.id, doc.to_dict() or {}) for doc in docs
            ],
            count=int(count),
            page=page,
            limit=limit,
        )

    def _query(self, filters: AdminLogFilters) -> Iterable[AdminLogEntry]:
        query = self._filtered(filters).order_by(
            "timestamp", direction=firestore.Query.DESCENDING
        )
        try:
            docs = list(query.stream())
        except google_exceptions.GoogleAPIError as e:
            raise StoreError() from e
        return [AdminLogEntry.from_document(doc.id, doc.to_dict() or {}) for doc in docs]


class MemoryAuditLog(AuditLog):
    """Audit log kept in process memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[AdminLogEntry] = []

    @property
    def entries(self) -> list[AdminLogEntry]:
        with self._lock:
            return list(self._entries)

    def append(self, entry: AdminLogEntry) -> AdminLogEntry:
        stored = dataclasses.replace(entry, id=entry.id or uuid.uuid4().hex)
        with self._lock:
            self._entries.append(stored)
        return stored

    def _query(self, filters: AdminLogFilters) -> Iterable[AdminLogEntry]:
        entries = [
            e
            for e in self.entries
            if (filters.date_from is None or e.timestamp >= filters.date_from)
            and (filters.date_to is None or e.timestamp <= filters.date_to)
        ]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)
