"""Access control gate: turns an opaque caller token into a verified identity."""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from firebase_admin import auth
from firebase_admin import exceptions as firebase_exceptions

from matchmaster.errors import ForbiddenError, StoreError, UnauthenticatedError

from .models import CallerIdentity, Role

if TYPE_CHECKING:
    from matchmaster.store.base import EntityStore

logger = logging.getLogger(__name__)


class IdentityProvider(abc.ABC):
    """External collaborator that verifies tokens."""

    @abc.abstractmethod
    def resolve(self, token: str) -> CallerIdentity:
        """Return the caller behind ``token`` or raise UnauthenticatedError."""


class FirebaseIdentityProvider(IdentityProvider):
    """Verifies Firebase ID tokens and reads the caller's role from the store."""

    def __init__(self, store: EntityStore, check_revoked: bool = True) -> None:
        self._store = store
        self._check_revoked = check_revoked

    def resolve(self, token: str) -> CallerIdentity:
        try:
            decoded = auth.verify_id_token(token, check_revoked=self._check_revoked)
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            logger.info(f"Rejected ID token: {e}")
            raise UnauthenticatedError() from e

        uid = decoded.get("uid")
        if not uid:
            raise UnauthenticatedError()

        try:
            profile = self._store.get_user(uid)
        except StoreError as e:
            raise UnauthenticatedError("Could not load user profile.") from e
        if profile is None:
            raise UnauthenticatedError("User profile not found.")

        try:
            role = Role(profile.role or Role.PLAYER.value)
        except ValueError as e:
            logger.warning(f"User {uid} has unrecognised role {profile.role!r}")
            raise UnauthenticatedError("User role is not recognised.") from e

        return CallerIdentity(
            user_id=uid,
            role=role,
            display_name=profile.display_name or decoded.get("name"),
        )


def bearer_token(header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authorize(caller: CallerIdentity, roles: Iterable[Role]) -> None:
    """Raise ForbiddenError unless the caller holds one of ``roles``."""
    if caller.role not in set(roles):
        raise ForbiddenError()


class AccessGate:
    """Fails closed: anything short of a verified identity is Unauthenticated.

    Role sufficiency is not checked here; each operation calls ``authorize``
    with the roles it needs.
    """

    def __init__(self, provider: IdentityProvider) -> None:
        self._provider = provider

    def authenticate(self, token: str | None) -> CallerIdentity:
        if not token:
            raise UnauthenticatedError("Missing authorization token.")
        try:
            return self._provider.resolve(token)
        except UnauthenticatedError:
            raise
        except Exception as e:
            logger.error(f"Identity provider failed: {e}")
            raise UnauthenticatedError() from e
