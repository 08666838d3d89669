"""Flask extensions for the application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from flask import Flask, current_app

if TYPE_CHECKING:
    from matchmaster.admin.services import AdjudicationService
    from matchmaster.audit.writer import AuditLog
    from matchmaster.auth.gate import AccessGate, IdentityProvider
    from matchmaster.store.base import EntityStore
    from matchmaster.tournament.services import ParticipationService

EXTENSION_NAME = "matchmaster"


@dataclass
class CoreState:
    """Components wired for one Flask app."""

    store: EntityStore
    audit_log: AuditLog
    gate: AccessGate
    participation: ParticipationService
    adjudication: AdjudicationService


class Core:
    """Builds the store, audit log, gate and services and attaches them to the app.

    Components passed to ``init_app`` win over those built from config.
    """

    def __init__(self, app: Flask | None = None, **components: Any) -> None:
        if app is not None:
            self.init_app(app, **components)

    def init_app(
        self,
        app: Flask,
        store: EntityStore | None = None,
        audit_log: AuditLog | None = None,
        identity: IdentityProvider | None = None,
    ) -> CoreState:
        # Imported here: the blueprint packages import this module.
        from matchmaster.admin.services import AdjudicationService
        from matchmaster.auth.gate import AccessGate, FirebaseIdentityProvider
        from matchmaster.tournament.services import ParticipationService

        store = store or self._build_store(app)
        audit_log = audit_log or self._build_audit_log(app)
        identity = identity or FirebaseIdentityProvider(store)

        state = CoreState(
            store=store,
            audit_log=audit_log,
            gate=AccessGate(identity),
            participation=ParticipationService(store),
            adjudication=AdjudicationService(store, audit_log),
        )
        app.extensions[EXTENSION_NAME] = state
        return state

    @staticmethod
    def _build_store(app: Flask) -> EntityStore:
        from matchmaster.core.constants import STORE_BACKEND_MEMORY
        from matchmaster.store import FirestoreEntityStore, MemoryEntityStore

        if app.config["STORE_BACKEND"] == STORE_BACKEND_MEMORY:
            return MemoryEntityStore()
        return FirestoreEntityStore()

    @staticmethod
    def _build_audit_log(app: Flask) -> AuditLog:
        from matchmaster.audit import FirestoreAuditLog, MemoryAuditLog
        from matchmaster.core.constants import STORE_BACKEND_MEMORY

        if app.config["STORE_BACKEND"] == STORE_BACKEND_MEMORY:
            return MemoryAuditLog()
        return FirestoreAuditLog()


core = Core()


def get_core() -> CoreState:
    """Return the components of the current app."""
    return current_app.extensions[EXTENSION_NAME]
