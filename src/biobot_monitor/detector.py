from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from biobot_monitor.models import UpdateCheckResult
from biobot_monitor.retry import RetryExecutor
from biobot_monitor.sources import PageFetcher, parse_page
from biobot_monitor.store import StateStore
from biobot_monitor.store.base import LAST_SAMPLE_DATE
from biobot_monitor.utils.datetime_utils import parse_iso_date, parse_sample_date
from biobot_monitor.utils.url_utils import resolve_resource_url

logger = logging.getLogger(__name__)

DEFAULT_PAGE_URL = "https://www.mwra.com/biobot/biobotdata.htm"
DEFAULT_BASE_URL = "https://www.mwra.com"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

SAMPLE_DATE_PATTERN = re.compile(r"samples collected through (\d{1,2}/\d{1,2}/\d{4})")
# Matches both "mwradata...-datapdf" and the newer "mwradata...-data" targets.
RESOURCE_LINK_PATTERN = re.compile(r"mwradata.*-data", re.IGNORECASE)


class ContentShapeError(RuntimeError):
    """Raised when a page loads but lacks the expected date or report link."""


@dataclass(slots=True)
class PageSnapshot:
    sample_date_raw: str
    resource_ref: str


def extract_sample_date(page_text: str) -> str:
    match = SAMPLE_DATE_PATTERN.search(page_text)
    if match is None:
        raise ContentShapeError(
            "Could not find sample date on webpage. "
            f"Page text starts with: {page_text[:200]}"
        )
    return match.group(1)


def select_resource_link(links: list[str]) -> str:
    for link in links:
        if RESOURCE_LINK_PATTERN.search(link):
            return link
    raise ContentShapeError("Could not find PDF link on webpage")


class UpdateDetector:
    def __init__(
        self,
        *,
        fetcher: PageFetcher,
        store: StateStore,
        page_url: str = DEFAULT_PAGE_URL,
        base_url: str = DEFAULT_BASE_URL,
        retry: RetryExecutor | None = None,
        max_attempts: int = 3,
        retry_delay: float = 30,
        timeout_seconds: float = 30,
        user_agent: str = BROWSER_USER_AGENT,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.page_url = page_url
        self.base_url = base_url
        self.retry = retry or RetryExecutor()
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.timeout_seconds = timeout_seconds
        self.headers = {"User-Agent": user_agent, "Accept": HTML_ACCEPT}

    def check_for_updates(self) -> UpdateCheckResult:
        try:
            return self._check()
        except Exception as exc:  # noqa: BLE001
            logger.error("Error checking for updates: %s", exc)
            return UpdateCheckResult.failed(str(exc))

    def _check(self) -> UpdateCheckResult:
        snapshot = self.retry.run(
            self._fetch_snapshot,
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
        )

        sample_date = parse_sample_date(snapshot.sample_date_raw)
        resource_url = resolve_resource_url(snapshot.resource_ref, self.base_url)

        state = self.store.load()
        previous_date = parse_iso_date(state.get(LAST_SAMPLE_DATE))
        is_new = previous_date is None or sample_date > previous_date

        logger.info(
            "Sample date %s (previous %s) is_new=%s",
            sample_date.isoformat(),
            previous_date.isoformat() if previous_date else "none",
            is_new,
        )

        return UpdateCheckResult.found(
            is_new=is_new,
            sample_date=sample_date,
            resource_ref=snapshot.resource_ref,
            resource_url=resource_url,
            previous_date=previous_date,
        )

    def _fetch_snapshot(self) -> PageSnapshot:
        html = self.fetcher.fetch_page(
            self.page_url,
            headers=self.headers,
            timeout=self.timeout_seconds,
        )
        page = parse_page(html)
        return PageSnapshot(
            sample_date_raw=extract_sample_date(page.text),
            resource_ref=select_resource_link(page.links),
        )
