from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from split_cli.core.config import (
    ConfigError,
    _deep_merge,
    default_config_path,
    display_settings_from_config,
    expand_path,
    format_spec_from_config,
    load_config,
)
from split_cli.core.models import FormatSpec, TimingMethod


def test_deep_merge_nested_dicts() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 3}
    override = {"a": {"b": 9}, "y": 4}
    merged = _deep_merge(base, override)
    assert merged == {"a": {"b": 9, "c": 2}, "x": 3, "y": 4}
    assert base["a"]["b"] == 1


def test_expand_path_expands_home_and_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SPLITS_TMP_PATH", str(tmp_path))
    expanded = expand_path("$SPLITS_TMP_PATH/config.toml")
    assert expanded == (tmp_path / "config.toml").resolve()


def test_default_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("SPLITS_CONFIG_FILE", str(path))
    assert default_config_path() == path.resolve()


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg["general"]["split-format"] == "Diff"
    assert cfg["general"]["comparison"] == "PB"
    assert cfg["format"]["timer"]["decimal-places"] == 2
    assert cfg["format"]["segment"]["dynamic"] is False


def test_load_config_uses_env_default(isolated_config: Path) -> None:
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('[general]\ncomparison = "Best"\n')
    assert load_config()["general"]["comparison"] == "Best"


def test_load_config_from_toml(write_temp_toml) -> None:
    path = write_temp_toml(
        "config.toml",
        """
[general]
split-format = "Time"

[format.timer]
dynamic = true
show-hours = false
""",
    )
    cfg = load_config(path)
    assert cfg["general"]["split-format"] == "Time"
    assert cfg["general"]["timing-method"] == "real-time"
    assert cfg["format"]["timer"]["dynamic"] is True
    assert cfg["format"]["timer"]["show-minutes"] is True


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"format": {"split": {"decimal-places": 3}}}))
    cfg = load_config(path)
    assert cfg["format"]["split"]["decimal-places"] == 3
    assert cfg["format"]["timer"]["decimal-places"] == 2


def test_load_config_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{bad json")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(path)


def test_load_config_invalid_toml_raises(write_temp_toml) -> None:
    path = write_temp_toml("config.toml", "[general\nsplit-format = ")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_load_config_unreadable_path_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.mkdir()
    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_config(path)


def test_load_config_non_table_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(path)


def test_format_spec_from_config_defaults() -> None:
    assert format_spec_from_config({}) == FormatSpec()


def test_format_spec_from_config_values() -> None:
    spec = format_spec_from_config({"show-hours": False, "decimal-places": 3, "dynamic": True})
    assert spec == FormatSpec(show_hours=False, decimal_places=3, dynamic=True)
    assert spec.cached_pattern is None


@pytest.mark.parametrize(
    "raw",
    [
        {"decimal-places": 12},
        {"decimal-places": -1},
        {"decimal-places": "2"},
        {"decimal-places": True},
        {"show-hours": "yes"},
        {"dynamic": 1},
    ],
)
def test_format_spec_from_config_rejects_bad_values(raw: Dict[str, Any]) -> None:
    with pytest.raises(ConfigError):
        format_spec_from_config(raw, name="format.timer")


def test_display_settings_from_defaults(tmp_path: Path) -> None:
    settings = display_settings_from_config(load_config(tmp_path / "missing.toml"))
    assert settings.split_format == "Diff"
    assert settings.comparison == "PB"
    assert settings.timing_method is TimingMethod.REAL_TIME
    assert settings.timer == FormatSpec()
    assert settings.timer is not settings.split


def test_display_settings_from_overrides(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    cfg["general"]["timing-method"] = "game-time"
    cfg["format"]["segment"]["dynamic"] = True
    settings = display_settings_from_config(cfg)
    assert settings.timing_method is TimingMethod.GAME_TIME
    assert settings.spec("segment").dynamic is True
    assert settings.spec("split").dynamic is False


@pytest.mark.parametrize(
    ("key", "value"),
    [("split-format", "Delta"), ("timing-method", "sundial")],
)
def test_display_settings_rejects_bad_general(tmp_path: Path, key: str, value: str) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    cfg["general"][key] = value
    with pytest.raises(ConfigError, match=key):
        display_settings_from_config(cfg)
