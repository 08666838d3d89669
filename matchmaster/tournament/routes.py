"""Routes for the tournament blueprint."""

from __future__ import annotations

from typing import Any

from flask import g, jsonify

from matchmaster.auth.decorators import token_required
from matchmaster.core.types import APIResponse
from matchmaster.extensions import get_core

from . import bp


@bp.route("/<string:tournament_id>", methods=["GET"])
@token_required
def view_tournament(tournament_id: str) -> Any:
    """Return a single tournament."""
    tournament = get_core().participation.get_tournament(tournament_id)
    response: APIResponse = {
        "success": True,
        "message": "Tournament loaded.",
        "data": tournament.to_dict(),
    }
    return jsonify(response)


@bp.route("/<string:tournament_id>/join", methods=["POST"])
@token_required
def join_tournament(tournament_id: str) -> Any:
    """Register the calling user for a tournament."""
    tournament = get_core().participation.join(tournament_id, g.caller.user_id)
    response: APIResponse = {
        "success": True,
        "message": "Successfully joined the tournament.",
        "data": tournament.to_dict(),
    }
    return jsonify(response)


@bp.route("/<string:tournament_id>/leave", methods=["POST"])
@token_required
def leave_tournament(tournament_id: str) -> Any:
    """Withdraw the calling user from a tournament."""
    tournament = get_core().participation.leave(tournament_id, g.caller.user_id)
    response: APIResponse = {
        "success": True,
        "message": "Successfully left the tournament.",
        "data": tournament.to_dict(),
    }
    return jsonify(response)
