"""Configuration loading and display settings construction."""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from split_cli.core.constants import (
    DEFAULT_COMPARISON_LABEL,
    FORMAT_SPEC_NAMES,
    MAX_DECIMAL_PLACES,
    SPLIT_FORMATS,
    TIMING_METHODS,
)
from split_cli.core.models import DisplaySettings, FormatSpec, TimingMethod

logger = logging.getLogger(__name__)

_FLAG_KEYS = {
    "show-hours": "show_hours",
    "show-minutes": "show_minutes",
    "show-seconds": "show_seconds",
    "show-decimals": "show_decimals",
    "dynamic": "dynamic",
}


class ConfigError(RuntimeError):
    """Raised when config file parsing or validation fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("SPLITS_CONFIG_FILE", "~/.config/splits/config.toml")
    return expand_path(raw)


def _default_format() -> Dict[str, Any]:
    return {
        "show-hours": True,
        "show-minutes": True,
        "show-seconds": True,
        "show-decimals": True,
        "decimal-places": 2,
        "dynamic": False,
    }


def _default_config() -> Dict[str, Any]:
    return {
        "general": {
            "comparison": DEFAULT_COMPARISON_LABEL,
            "split-format": "Diff",
            "timing-method": "real-time",
        },
        "format": {name: _default_format() for name in FORMAT_SPEC_NAMES},
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        text = path.read_text()
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
        logger.debug("Loaded config from %s", cfg_path)
    else:
        logger.debug("No config at %s, using defaults", cfg_path)

    return cfg


def format_spec_from_config(raw: Dict[str, Any], name: str = "format") -> FormatSpec:
    """Build a FormatSpec from a ``[format.<name>]`` table."""
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")

    values = _deep_merge(_default_format(), raw)
    kwargs: Dict[str, Any] = {}
    for key, attr in _FLAG_KEYS.items():
        value = values[key]
        if not isinstance(value, bool):
            raise ConfigError(f"[{name}] {key} must be true or false, got {value!r}")
        kwargs[attr] = value

    places = values["decimal-places"]
    if isinstance(places, bool) or not isinstance(places, int):
        raise ConfigError(f"[{name}] decimal-places must be an integer, got {places!r}")
    if not 0 <= places <= MAX_DECIMAL_PLACES:
        raise ConfigError(
            f"[{name}] decimal-places must be between 0 and {MAX_DECIMAL_PLACES}, got {places}"
        )
    kwargs["decimal_places"] = places

    return FormatSpec(**kwargs)


def display_settings_from_config(config: Dict[str, Any]) -> DisplaySettings:
    """Validate the loaded config and build the display settings object."""
    general = config.get("general", {})
    formats = config.get("format", {})
    if not isinstance(general, dict) or not isinstance(formats, dict):
        raise ConfigError("[general] and [format] must be tables")

    split_format = general.get("split-format", "Diff")
    if split_format not in SPLIT_FORMATS:
        raise ConfigError(
            f"split-format must be one of {', '.join(SPLIT_FORMATS)}, got {split_format!r}"
        )

    timing_method = general.get("timing-method", "real-time")
    if timing_method not in TIMING_METHODS:
        raise ConfigError(
            f"timing-method must be one of {', '.join(TIMING_METHODS)}, got {timing_method!r}"
        )

    specs = {
        name: format_spec_from_config(formats.get(name, {}), name=f"format.{name}")
        for name in FORMAT_SPEC_NAMES
    }
    return DisplaySettings(
        timer=specs["timer"],
        split=specs["split"],
        segment=specs["segment"],
        comparison=str(general.get("comparison") or DEFAULT_COMPARISON_LABEL),
        split_format=split_format,
        timing_method=TimingMethod(timing_method),
    )
