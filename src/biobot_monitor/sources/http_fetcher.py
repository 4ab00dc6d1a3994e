from __future__ import annotations

import logging
from typing import Mapping

import requests

from .base import PageFetcher, TransientFetchError

logger = logging.getLogger(__name__)


class HttpFetcher(PageFetcher):
    def fetch_page(self, url: str, *, headers: Mapping[str, str], timeout: float) -> str:
        response = self._get(url, headers=headers, timeout=timeout)
        return response.text

    def fetch_bytes(self, url: str, *, headers: Mapping[str, str], timeout: float) -> bytes:
        response = self._get(url, headers=headers, timeout=timeout)
        return response.content

    def _get(self, url: str, *, headers: Mapping[str, str], timeout: float) -> requests.Response:
        logger.debug("GET %s (timeout=%ss)", url, timeout)
        try:
            response = requests.get(url, headers=dict(headers), timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TransientFetchError(f"GET {url} failed: {exc}") from exc
        return response
