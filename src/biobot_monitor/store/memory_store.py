from __future__ import annotations

import copy

from .base import PersistedState, StateStore


class InMemoryStateStore(StateStore):
    def __init__(self, initial: PersistedState | None = None) -> None:
        self._state: PersistedState = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    def load(self) -> PersistedState:
        return copy.deepcopy(self._state)

    def save(self, state: PersistedState) -> None:
        self._state = copy.deepcopy(dict(state))
        self.save_count += 1
