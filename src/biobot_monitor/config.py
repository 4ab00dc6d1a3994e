from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from biobot_monitor.detector import BROWSER_USER_AGENT, DEFAULT_BASE_URL, DEFAULT_PAGE_URL


class ConfigError(ValueError):
    """Raised when configuration is invalid."""


@dataclass(slots=True)
class PageSettings:
    url: str = DEFAULT_PAGE_URL
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = 30
    user_agent: str = BROWSER_USER_AGENT


@dataclass(slots=True)
class RetrySettings:
    max_attempts: int = 3
    delay_seconds: float = 30


@dataclass(slots=True)
class DownloadSettings:
    path: str = "data/latest_data.pdf"
    timeout_seconds: int = 60
    max_attempts: int = 3
    delay_seconds: float = 5


@dataclass(slots=True)
class StorageSettings:
    path: str = "state/last_update.json"


@dataclass(slots=True)
class OutputSettings:
    data_dir: str = "data/processed"
    publish_dir: str | None = None


@dataclass(slots=True)
class AppConfig:
    page: PageSettings = field(default_factory=PageSettings)
    retry: RetrySettings = field(default_factory=RetrySettings)
    download: DownloadSettings = field(default_factory=DownloadSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    log_level: str = "INFO"


def _as_mapping(value: Any, *, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{field_name} must be a mapping")
    return value


def _as_string(value: Any, *, field_name: str, default: str) -> str:
    if value is None:
        return default
    normalized = str(value).strip()
    if not normalized:
        raise ConfigError(f"{field_name} must not be empty")
    return normalized


def _as_int(value: Any, *, field_name: str, minimum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be an integer")

    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc

    if minimum is not None and parsed < minimum:
        raise ConfigError(f"{field_name} must be >= {minimum}")
    return parsed


def _as_seconds(value: Any, *, field_name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a number")

    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a number") from exc

    if parsed < 0:
        raise ConfigError(f"{field_name} must be >= 0")
    return parsed


def _resolve_relative_path(config_path: Path, raw_path: str) -> str:
    candidate = Path(raw_path).expanduser()
    if candidate.is_absolute():
        return str(candidate)
    return str((config_path.parent / candidate).resolve())


def load_config(path: str | Path) -> AppConfig:
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle) or {}

    if not isinstance(parsed, dict):
        raise ConfigError("Config root must be a mapping")

    defaults = AppConfig()

    raw_page = _as_mapping(parsed.get("page"), field_name="page")
    page_settings = PageSettings(
        url=_as_string(raw_page.get("url"), field_name="page.url", default=defaults.page.url),
        base_url=_as_string(
            raw_page.get("base_url"),
            field_name="page.base_url",
            default=defaults.page.base_url,
        ),
        timeout_seconds=_as_int(
            raw_page.get("timeout_seconds", defaults.page.timeout_seconds),
            field_name="page.timeout_seconds",
            minimum=1,
        ),
        user_agent=_as_string(
            raw_page.get("user_agent"),
            field_name="page.user_agent",
            default=defaults.page.user_agent,
        ),
    )

    raw_retry = _as_mapping(parsed.get("retry"), field_name="retry")
    retry_settings = RetrySettings(
        max_attempts=_as_int(
            raw_retry.get("max_attempts", defaults.retry.max_attempts),
            field_name="retry.max_attempts",
            minimum=1,
        ),
        delay_seconds=_as_seconds(
            raw_retry.get("delay_seconds", defaults.retry.delay_seconds),
            field_name="retry.delay_seconds",
        ),
    )

    raw_download = _as_mapping(parsed.get("download"), field_name="download")
    download_settings = DownloadSettings(
        path=_resolve_relative_path(
            config_path,
            _as_string(
                raw_download.get("path"),
                field_name="download.path",
                default=defaults.download.path,
            ),
        ),
        timeout_seconds=_as_int(
            raw_download.get("timeout_seconds", defaults.download.timeout_seconds),
            field_name="download.timeout_seconds",
            minimum=1,
        ),
        max_attempts=_as_int(
            raw_download.get("max_attempts", defaults.download.max_attempts),
            field_name="download.max_attempts",
            minimum=1,
        ),
        delay_seconds=_as_seconds(
            raw_download.get("delay_seconds", defaults.download.delay_seconds),
            field_name="download.delay_seconds",
        ),
    )

    raw_storage = _as_mapping(parsed.get("storage"), field_name="storage")
    storage_path = _as_string(
        raw_storage.get("path"),
        field_name="storage.path",
        default=defaults.storage.path,
    )
    storage_settings = StorageSettings(path=_resolve_relative_path(config_path, storage_path))

    raw_output = _as_mapping(parsed.get("output"), field_name="output")
    data_dir = _as_string(
        raw_output.get("data_dir"),
        field_name="output.data_dir",
        default=defaults.output.data_dir,
    )
    publish_raw = raw_output.get("publish_dir")
    publish_dir = (
        _resolve_relative_path(config_path, str(publish_raw).strip())
        if publish_raw is not None and str(publish_raw).strip()
        else None
    )
    output_settings = OutputSettings(
        data_dir=_resolve_relative_path(config_path, data_dir),
        publish_dir=publish_dir,
    )

    return AppConfig(
        page=page_settings,
        retry=retry_settings,
        download=download_settings,
        storage=storage_settings,
        output=output_settings,
        log_level=str(parsed.get("log_level", "INFO")).upper(),
    )
