"""Service layer for administrative match adjudication."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from matchmaster.audit.models import (
    AdminAction,
    AdminLogEntry,
    AdminLogFilters,
    AdminLogPage,
    TargetType,
)
from matchmaster.auth.gate import authorize
from matchmaster.auth.models import ELEVATED_ROLES
from matchmaster.core.constants import DEFAULT_ADMIN_NAME, DEFAULT_OVERRIDE_REASON
from matchmaster.errors import AuditWriteError, InvalidInputError
from matchmaster.match.models import MatchResult, MatchStatus
from matchmaster.utils import is_blank, utcnow

from .models import OverrideOutcome

if TYPE_CHECKING:
    import datetime

    from matchmaster.audit.writer import AuditLog
    from matchmaster.auth.models import CallerIdentity
    from matchmaster.store.base import EntityStore

logger = logging.getLogger(__name__)


class AdjudicationService:
    """Privileged correction of match results with an audit trail."""

    def __init__(
        self,
        store: EntityStore,
        audit_log: AuditLog,
        clock: Callable[[], datetime.datetime] = utcnow,
    ) -> None:
        self._store = store
        self._audit_log = audit_log
        self._clock = clock

    def override_result(
        self,
        match_id: str,
        result: MatchResult | Mapping[str, Any],
        reason: str | None,
        caller: CallerIdentity,
    ) -> OverrideOutcome:
        """Overwrite a match result and record who did it and why.

        The write is last-writer-wins: the match's prior status is recorded
        in the audit entry, not checked. Once the match is written the
        operation succeeds even if the audit entry cannot be stored.
        """
        # 1. Authorization, before touching the store
        authorize(caller, ELEVATED_ROLES)

        # 2. Input validation
        if is_blank(match_id):
            raise InvalidInputError("Match ID is required.")
        if not isinstance(result, MatchResult):
            result = MatchResult.from_dict(result)
        result.validate()
        if reason is not None and not isinstance(reason, str):
            raise InvalidInputError("Reason must be text.")

        # 3. Existence
        match = self._store.get_match(match_id)

        # 4. Referential validation
        result.check_against(match)

        # 5. Commit
        now = self._clock()
        self._store.update_match_result(
            match_id,
            {
                "score_a": result.score_a,
                "score_b": result.score_b,
                "winner_id": result.winner_id,
                "match_data": result.match_data.to_dict() if result.match_data else None,
                "status": MatchStatus.COMPLETED.value,
                "completed_at": now,
            },
        )
        logger.info(
            f"Match {match_id} result overridden by {caller.user_id} "
            f"({match.status} -> {MatchStatus.COMPLETED.value})"
        )

        # 6. Audit
        entry = AdminLogEntry(
            action=AdminAction.OVERRIDE_MATCH,
            target_type=TargetType.MATCH,
            target_id=match_id,
            target_name=f"Match {match_id}",
            admin_id=caller.user_id,
            admin_name=caller.display_name or DEFAULT_ADMIN_NAME,
            reason=reason if not is_blank(reason) else DEFAULT_OVERRIDE_REASON,
            details={
                "old_status": match.status,
                "new_result": result.to_dict(),
                "tournament_id": match.tournament_id,
            },
            timestamp=now,
        )
        try:
            stored = self._audit_log.append(entry)
        except Exception as e:
            # The result is already committed.
            warning = (
                e.message
                if isinstance(e, AuditWriteError)
                else f"Failed to log admin action: {e}"
            )
            logger.warning(f"Failed to log admin action for match {match_id}: {e}")
            return OverrideOutcome(match_id=match_id, audit_warning=warning)

        return OverrideOutcome(match_id=match_id, audit_entry_id=stored.id)

    def list_logs(
        self,
        caller: CallerIdentity,
        filters: AdminLogFilters | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> AdminLogPage:
        """Browse the audit trail, newest first."""
        authorize(caller, ELEVATED_ROLES)
        if page < 1 or limit < 1:
            raise InvalidInputError("Page and limit must be positive.")
        return self._audit_log.list_entries(filters or AdminLogFilters(), page, limit)
