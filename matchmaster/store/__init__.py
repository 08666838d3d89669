"""Entity store adapters."""

from .base import EntityStore
from .firestore import FirestoreEntityStore
from .memory import MemoryEntityStore

__all__ = ["EntityStore", "FirestoreEntityStore", "MemoryEntityStore"]
