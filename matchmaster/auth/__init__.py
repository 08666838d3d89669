"""Caller authentication and role checks."""

from .gate import (
    AccessGate,
    FirebaseIdentityProvider,
    IdentityProvider,
    authorize,
    bearer_token,
)
from .models import ELEVATED_ROLES, CallerIdentity, Role, UserProfile

__all__ = [
    "ELEVATED_ROLES",
    "AccessGate",
    "CallerIdentity",
    "FirebaseIdentityProvider",
    "IdentityProvider",
    "Role",
    "UserProfile",
    "authorize",
    "bearer_token",
]
