"""Admin routes for the application."""

from __future__ import annotations

import datetime
from typing import Any

from flask import current_app, g, jsonify, request

from matchmaster.audit.models import AdminAction, AdminLogFilters
from matchmaster.auth.decorators import token_required
from matchmaster.auth.models import ELEVATED_ROLES
from matchmaster.core.types import APIResponse
from matchmaster.errors import InvalidInputError
from matchmaster.extensions import get_core

from . import bp
from .forms import AdminLogFilterForm


@bp.route("/matches/<string:match_id>/override", methods=["POST"])
@token_required
def override_match(match_id: str) -> Any:
    """Overwrite a match result.

    Role checks happen in the adjudication service so that an unprivileged
    caller is refused before the payload is even looked at.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}

    outcome = get_core().adjudication.override_result(
        match_id, payload.get("result"), payload.get("reason"), g.caller
    )

    response: APIResponse = {
        "success": True,
        "message": "Match result updated successfully.",
        "data": outcome.to_dict(),
    }
    return jsonify(response)


@bp.route("/logs", methods=["GET"])
@token_required(roles=ELEVATED_ROLES)
def admin_logs() -> Any:
    """List audit entries, newest first."""
    form = AdminLogFilterForm(request.args)
    if not form.validate():
        raise InvalidInputError(form.first_error())

    max_limit = current_app.config["ADMIN_LOG_MAX_PAGE_SIZE"]
    limit = min(form.limit.data or current_app.config["ADMIN_LOG_PAGE_SIZE"], max_limit)

    filters = AdminLogFilters(
        date_from=_start_of_day(form.date_from.data),
        date_to=_end_of_day(form.date_to.data),
        search=(form.search.data or "").strip() or None,
        action=AdminAction(form.action.data) if form.action.data else None,
    )
    page = get_core().adjudication.list_logs(g.caller, filters, form.page.data, limit)

    response: APIResponse = {
        "success": True,
        "message": f"{page.count} log entries.",
        "data": page.to_dict(),
    }
    return jsonify(response)


def _start_of_day(day: datetime.date | None) -> datetime.datetime | None:
    if day is None:
        return None
    return datetime.datetime.combine(day, datetime.time.min, tzinfo=datetime.timezone.utc)


def _end_of_day(day: datetime.date | None) -> datetime.datetime | None:
    if day is None:
        return None
    return datetime.datetime.combine(day, datetime.time.max, tzinfo=datetime.timezone.utc)
