"""State store implementations."""

from .base import PersistedState, StateStore
from .json_store import JsonStateStore
from .memory_store import InMemoryStateStore

__all__ = ["PersistedState", "StateStore", "JsonStateStore", "InMemoryStateStore"]
