"""Core data types for the matchmaster application."""

from typing import Any, Dict, Optional, TypedDict  # noqa: UP035


class _APIResponseBase(TypedDict):
    success: bool
    message: str
    data: Optional[Dict[str, Any]]  # noqa: UP006


class APIResponse(_APIResponseBase, total=False):
    """Generic API response structure.

    ``code`` is only present on failures and carries the error kind.
    """

    code: str
