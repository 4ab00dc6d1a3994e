from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable

from biobot_monitor.detector import UpdateDetector
from biobot_monitor.downloader import download_report
from biobot_monitor.extract import extract_pdf_text, extract_table_from_pages
from biobot_monitor.models import UpdateCheckResult
from biobot_monitor.retry import RetryExecutor
from biobot_monitor.sources import PageFetcher
from biobot_monitor.store import StateStore
from biobot_monitor.writers import publish_file, save_extracted_table

logger = logging.getLogger(__name__)

TextExtractor = Callable[[Path], list[str]]


@dataclass(slots=True)
class RunStats:
    checked: bool = False
    updated: bool = False
    forced: bool = False
    sample_date: date | None = None
    previous_date: date | None = None
    north_records: int = 0
    south_records: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class MonitorService:
    def __init__(
        self,
        *,
        detector: UpdateDetector,
        fetcher: PageFetcher,
        store: StateStore,
        report_path: str | Path,
        data_dir: str | Path,
        publish_dir: str | Path | None = None,
        retry: RetryExecutor | None = None,
        download_attempts: int = 3,
        download_delay: float = 5,
        download_timeout: float = 60,
        text_extractor: TextExtractor = extract_pdf_text,
    ) -> None:
        self.detector = detector
        self.fetcher = fetcher
        self.store = store
        self.report_path = Path(report_path)
        self.data_dir = Path(data_dir)
        self.publish_dir = Path(publish_dir) if publish_dir else None
        self.retry = retry or RetryExecutor()
        self.download_attempts = download_attempts
        self.download_delay = download_delay
        self.download_timeout = download_timeout
        self.text_extractor = text_extractor

    def run_once(self, *, force: bool = False) -> RunStats:
        stats = RunStats()

        update = self.detector.check_for_updates()
        stats.checked = True
        if not update.ok:
            message = f"update check failed: {update.error}"
            logger.error(message)
            stats.errors.append(message)
            return stats

        stats.sample_date = update.sample_date
        stats.previous_date = update.previous_date
        logger.info("Current sample date: %s", update.sample_date_iso)
        logger.info(
            "Previous sample date: %s",
            update.previous_date.isoformat() if update.previous_date else "None (first run)",
        )

        if not update.is_new and not force:
            logger.info("No new data available")
            self.store.log_check()
            return stats

        if not update.is_new:
            stats.forced = True
            logger.info("Forcing update for unchanged sample date")
        else:
            logger.info("New data available")

        try:
            self._process(update, stats)
        except Exception as exc:  # noqa: BLE001
            message = f"pipeline failed for {update.resource_url}: {exc}"
            logger.exception(message)
            stats.errors.append(message)
            return stats

        stats.updated = True
        return stats

    def _process(self, update: UpdateCheckResult, stats: RunStats) -> None:
        logger.info("Downloading report from %s", update.resource_url)
        report_path = download_report(
            self.fetcher,
            update.resource_url,
            self.report_path,
            retry=self.retry,
            max_attempts=self.download_attempts,
            delay=self.download_delay,
            timeout=self.download_timeout,
        )

        table = extract_table_from_pages(self.text_extractor(report_path))
        stats.north_records = len(table.north)
        stats.south_records = len(table.south)

        paths = save_extracted_table(table, self.data_dir)
        if self.publish_dir is not None:
            publish_file(paths["combined"], self.publish_dir)

        self.store.update_state(update.sample_date_iso, update.resource_ref)
        logger.info("State updated to sample date %s", update.sample_date_iso)
