from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml
from typer.testing import CliRunner

from split_cli.core.models import DisplaySettings
from split_cli.core.timer import TimerSnapshot
from split_cli.utils.parsing import snapshot_from_dict


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "no-config" / "config.toml"
    monkeypatch.setenv("SPLITS_CONFIG_FILE", str(path))
    return path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def sample_snapshot_data() -> Dict[str, Any]:
    # PB splits 1:40 / 4:10 / 6:40 / 8:40, golds 1:35 / 2:20 / 2:25 / 1:50.
    return {
        "game": "Celeste",
        "category": "Any%",
        "comparison": "Personal Best",
        "phase": "running",
        "current-split-index": 2,
        "attempt": 410_000,
        "segments": [
            {
                "name": "Forsaken City",
                "split": 98_000,
                "best": 95_000,
                "comparisons": {"Personal Best": 100_000},
            },
            {
                "name": "Old Site",
                "split": "4:15",
                "best": "2:20",
                "comparisons": {"Personal Best": "4:10"},
            },
            {
                "name": "Celestial Resort",
                "split": None,
                "best": 145_000,
                "comparisons": {"Personal Best": 400_000},
            },
            {
                "name": "Golden Ridge",
                "best": 110_000,
                "comparisons": {"Personal Best": 520_000},
            },
        ],
    }


@pytest.fixture()
def sample_snapshot(sample_snapshot_data: Dict[str, Any]) -> TimerSnapshot:
    return snapshot_from_dict(sample_snapshot_data)


@pytest.fixture()
def settings() -> DisplaySettings:
    return DisplaySettings()


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_yaml(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(payload, sort_keys=False))
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
