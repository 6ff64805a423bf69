"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from split_cli.core.models import DisplaySettings


@dataclass
class CLIState:
    """CLI runtime options, loaded configuration and display settings."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    settings: DisplaySettings
    console: Console
