from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from biobot_monitor.utils.datetime_utils import utc_timestamp

PersistedState = dict[str, Any]

LAST_SAMPLE_DATE = "last_sample_date"
LAST_PDF_URL = "last_pdf_url"
LAST_CHECK_TIME = "last_check_time"
LAST_DOWNLOAD_TIME = "last_download_time"


class StateStore(ABC):
    @abstractmethod
    def load(self) -> PersistedState:
        """Return a copy of the persisted state, or an empty mapping if none exists."""

    @abstractmethod
    def save(self, state: PersistedState) -> None:
        """Replace the persisted state with ``state``."""

    def update_state(self, sample_date: str, resource_ref: str) -> PersistedState:
        now = utc_timestamp()
        state: PersistedState = {
            LAST_SAMPLE_DATE: sample_date,
            LAST_PDF_URL: resource_ref,
            LAST_CHECK_TIME: now,
            LAST_DOWNLOAD_TIME: now,
        }
        self.save(state)
        return dict(state)

    def log_check(self) -> PersistedState:
        state = self.load()
        state[LAST_CHECK_TIME] = utc_timestamp()
        self.save(state)
        return dict(state)
