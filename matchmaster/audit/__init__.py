"""Administrative audit trail."""

from .models import AdminAction, AdminLogEntry, AdminLogFilters, AdminLogPage, TargetType
from .writer import AuditLog, FirestoreAuditLog, MemoryAuditLog

__all__ = [
    "AdminAction",
    "AdminLogEntry",
    "AdminLogFilters",
    "AdminLogPage",
    "AuditLog",
    "FirestoreAuditLog",
    "MemoryAuditLog",
    "TargetType",
]
