from __future__ import annotations

import json
from pathlib import Path

import pytest

from biobot_monitor import cli


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text("storage:\n  path: state/last_update.json\n", encoding="utf-8")
    return path


def test_show_state_prints_persisted_record(tmp_path, capsys) -> None:
    config_path = _config(tmp_path)
    state_path = tmp_path / "state" / "last_update.json"
    state_path.parent.mkdir()
    state_path.write_text(json.dumps({"last_sample_date": "2024-12-25"}), encoding="utf-8")

    exit_code = cli.main(["-c", str(config_path), "show-state"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"last_sample_date": "2024-12-25"}


def test_extract_command_writes_csv_files(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli,
        "extract_pdf_text",
        lambda path: ["12/25/2024 1500 1200 1450 1180 100 120 90 110"],
    )
    output_dir = tmp_path / "processed"

    exit_code = cli.main(
        ["-c", str(_config(tmp_path)), "extract", "report.pdf", "--output-dir", str(output_dir)]
    )

    assert exit_code == 0
    assert (output_dir / "combined_data.csv").exists()


def test_extract_command_fails_on_unparseable_report(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "extract_pdf_text", lambda path: ["nothing to see"])

    exit_code = cli.main(["-c", str(_config(tmp_path)), "extract", "report.pdf"])

    assert exit_code == 1


def test_missing_config_exits_with_usage_error(tmp_path, capsys) -> None:
    exit_code = cli.main(["-c", str(tmp_path / "missing.yaml"), "check"])

    assert exit_code == 2
    assert "Config error" in capsys.readouterr().err
