"""Error handlers that render failures as JSON envelopes."""

from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .core.types import APIResponse
from .errors import AppError

error_handlers_bp = Blueprint("error_handlers", __name__)

SERVER_ERROR_STATUS = 500


def _error_response(code, message, status_code):
    response: APIResponse = {
        "success": False,
        "code": code,
        "message": message,
        "data": None,
    }
    return jsonify(response), status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles every application error with its own code and message."""
    if error.status_code >= SERVER_ERROR_STATUS:
        current_app.logger.error(f"{type(error).__name__}: {error.message}")
    else:
        current_app.logger.warning(f"{type(error).__name__}: {error.message}")
    return _error_response(error.code, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Handles routing errors such as unknown URLs or wrong methods."""
    return _error_response(
        e.name.upper().replace(" ", "_"), e.description, e.code or 500
    )


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _error_response(
        "INTERNAL_ERROR", "An unexpected error occurred. Please try again later.", 500
    )
