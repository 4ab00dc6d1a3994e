from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .base import PersistedState, StateStore

logger = logging.getLogger(__name__)


class JsonStateStore(StateStore):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> PersistedState:
        if not self.path.exists():
            return {}

        with self.path.open("r", encoding="utf-8") as handle:
            parsed = json.load(handle)

        if not isinstance(parsed, dict):
            raise ValueError(f"State file {self.path} must contain a JSON object")
        return parsed

    def save(self, state: PersistedState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(dict(state), indent=2, ensure_ascii=False) + "\n"

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=self.path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved state to %s", self.path)
