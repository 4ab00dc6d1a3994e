from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from biobot_monitor.retry import RetryExecutor
from biobot_monitor.sources import PageFetcher, TransientFetchError

logger = logging.getLogger(__name__)

DOWNLOAD_USER_AGENT = "Mozilla/5.0 (compatible; MWRA-Biobot-Monitor/1.0)"


def download_report(
    fetcher: PageFetcher,
    url: str,
    output_path: str | Path,
    *,
    retry: RetryExecutor | None = None,
    max_attempts: int = 3,
    delay: float = 5,
    timeout: float = 60,
    headers: Mapping[str, str] | None = None,
) -> Path:
    """Download ``url`` to ``output_path``, overwriting any previous report."""
    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    request_headers = dict(headers or {"User-Agent": DOWNLOAD_USER_AGENT})

    def _attempt() -> Path:
        content = fetcher.fetch_bytes(url, headers=request_headers, timeout=timeout)
        if not content:
            raise TransientFetchError(f"Downloaded file from {url} is empty")
        target.write_bytes(content)
        return target

    path = (retry or RetryExecutor()).run(_attempt, max_attempts=max_attempts, delay=delay)
    logger.info("Downloaded report to %s", path)
    return path
