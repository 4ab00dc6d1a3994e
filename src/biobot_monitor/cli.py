from __future__ import annotations

import argparse
import json
import logging
import sys

from biobot_monitor.config import AppConfig, ConfigError, load_config
from biobot_monitor.detector import UpdateDetector
from biobot_monitor.extract import ParseError, extract_pdf_text, extract_table_from_pages
from biobot_monitor.logging_config import setup_logging
from biobot_monitor.models import UpdateCheckResult
from biobot_monitor.retry import RetryExecutor
from biobot_monitor.service import MonitorService
from biobot_monitor.sources import HttpFetcher, PageFetcher
from biobot_monitor.store import JsonStateStore, StateStore
from biobot_monitor.writers import save_extracted_table

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biobot-monitor",
        description="Check the MWRA Biobot page for new wastewater data and extract it.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.yaml",
        help="Path to config YAML file (default: config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        help="Override config log level (e.g. INFO, DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Check for new data without downloading or saving state")

    run = subparsers.add_parser("run", help="Check, download, extract and save new data")
    run.add_argument(
        "--force",
        action="store_true",
        help="Download and extract even if the sample date has not changed",
    )

    extract = subparsers.add_parser("extract", help="Extract CSV series from a local report PDF")
    extract.add_argument("pdf", help="Path to the report PDF")
    extract.add_argument("--output-dir", help="Directory for CSV files (default: output.data_dir)")

    subparsers.add_parser("show-state", help="Print the persisted state record")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = load_config(args.config)
    except ConfigError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2

    log_level = args.log_level or app_config.log_level
    setup_logging(log_level)

    store = _build_store(app_config)

    if args.command == "show-state":
        print(json.dumps(store.load(), indent=2, sort_keys=True))
        return 0

    if args.command == "extract":
        return _run_extract(args.pdf, args.output_dir or app_config.output.data_dir)

    fetcher = HttpFetcher()
    detector = _build_detector(app_config, fetcher=fetcher, store=store)

    if args.command == "check":
        result = detector.check_for_updates()
        _print_check_result(result)
        return 0 if result.ok else 1

    service = MonitorService(
        detector=detector,
        fetcher=fetcher,
        store=store,
        report_path=app_config.download.path,
        data_dir=app_config.output.data_dir,
        publish_dir=app_config.output.publish_dir,
        download_attempts=app_config.download.max_attempts,
        download_delay=app_config.download.delay_seconds,
        download_timeout=app_config.download.timeout_seconds,
    )

    stats = service.run_once(force=args.force)
    logger.info(
        "Run complete | updated=%s forced=%s sample_date=%s north=%d south=%d errors=%d",
        stats.updated,
        stats.forced,
        stats.sample_date.isoformat() if stats.sample_date else "none",
        stats.north_records,
        stats.south_records,
        len(stats.errors),
    )

    return 0 if stats.ok else 1


def _build_store(app_config: AppConfig) -> JsonStateStore:
    return JsonStateStore(app_config.storage.path)


def _build_detector(
    app_config: AppConfig,
    *,
    fetcher: PageFetcher,
    store: StateStore,
) -> UpdateDetector:
    return UpdateDetector(
        fetcher=fetcher,
        store=store,
        page_url=app_config.page.url,
        base_url=app_config.page.base_url,
        retry=RetryExecutor(),
        max_attempts=app_config.retry.max_attempts,
        retry_delay=app_config.retry.delay_seconds,
        timeout_seconds=app_config.page.timeout_seconds,
        user_agent=app_config.page.user_agent,
    )


def _run_extract(pdf_path: str, output_dir: str) -> int:
    try:
        table = extract_table_from_pages(extract_pdf_text(pdf_path))
    except ParseError as exc:
        logger.error("Extraction failed for %s: %s", pdf_path, exc)
        return 1

    save_extracted_table(table, output_dir)
    logger.info(
        "Extraction complete | north=%d south=%d combined=%d",
        len(table.north),
        len(table.south),
        len(table.combined),
    )
    return 0


def _print_check_result(result: UpdateCheckResult) -> None:
    if not result.ok:
        print(f"Check failed: {result.error}")
        return

    previous = result.previous_date.isoformat() if result.previous_date else "None (first run)"
    print(f"Current sample date: {result.sample_date_iso}")
    print(f"Previous sample date: {previous}")
    print(f"Report URL: {result.resource_url}")
    print(f"New data: {'yes' if result.is_new else 'no'}")


if __name__ == "__main__":
    raise SystemExit(main())
