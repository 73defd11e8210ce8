"""Application persistence."""

from .store import ApplicationStore, StoreSnapshot

__all__ = [
    "ApplicationStore",
    "StoreSnapshot",
]
