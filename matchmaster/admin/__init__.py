"""The admin blueprint."""

from flask import Blueprint

bp = Blueprint("admin", __name__, url_prefix="/admin")

from . import routes  # noqa: E402
from .services import AdjudicationService  # noqa: E402

__all__ = ["AdjudicationService", "routes"]
