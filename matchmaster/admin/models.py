"""Data models for the admin blueprint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class OverrideOutcome:
    """Result of an administrative match override.

    ``audit_warning`` is set when the result committed but the audit entry
    could not be written.
    """

    match_id: str
    success: bool = True
    audit_warning: Optional[str] = None
    audit_entry_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"match_id": self.match_id, "success": self.success}
        if self.audit_warning:
            data["audit_warning"] = self.audit_warning
        return data
