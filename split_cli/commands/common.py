"""Shared command helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import typer

from split_cli.core.classify import classification_classes
from split_cli.core.rows import Frame
from split_cli.core.state import CLIState
from split_cli.core.timer import TimerSnapshot
from split_cli.utils.parsing import SnapshotError, load_timer_snapshot, parse_duration_text


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def duration_argument(value: str) -> int:
    """Parse a validated duration option into milliseconds."""
    try:
        return parse_duration_text(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))


def load_snapshot(path: Path) -> TimerSnapshot:
    """Load a timer snapshot, exiting with code 2 on bad input."""
    try:
        return load_timer_snapshot(path)
    except SnapshotError as exc:
        typer.echo(f"Snapshot error: {exc}")
        raise typer.Exit(code=2)


def frame_to_dict(frame: Frame) -> Dict[str, Any]:
    """JSON-friendly view of a rendered frame."""
    return {
        "game": frame.game_name,
        "category": frame.category_name,
        "phase": frame.phase,
        "rows": [
            {
                "index": row.index,
                "name": row.name,
                "value": row.value,
                "classification": row.classification.value,
                "current": row.current,
                "css_classes": classification_classes(row.classification, row.current),
            }
            for row in frame.rows
        ],
        "current_segment": [
            {"label": line.label, "value": line.value} for line in frame.current_info
        ],
        "previous_segment": [
            {
                "label": line.label,
                "value": line.value,
                "classification": line.classification.value,
            }
            for line in frame.previous_info
        ],
        "timer": {"main": frame.readout.main, "fraction": frame.readout.fraction},
    }
