from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping


class TransientFetchError(RuntimeError):
    """Raised on network failure, timeout or a non-success HTTP status."""


class PageFetcher(ABC):
    @abstractmethod
    def fetch_page(self, url: str, *, headers: Mapping[str, str], timeout: float) -> str:
        """Fetch an HTML document and return its decoded body."""

    @abstractmethod
    def fetch_bytes(self, url: str, *, headers: Mapping[str, str], timeout: float) -> bytes:
        """Fetch a binary resource and return the raw body."""
