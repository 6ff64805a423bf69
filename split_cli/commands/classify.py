"""Split classification command."""

from __future__ import annotations

from typing import Optional

import typer
from rich.text import Text

from split_cli.commands.common import duration_argument, get_state, print_json_payload
from split_cli.core.classify import classify_split
from split_cli.utils.formatting import format_signed
from split_cli.utils.parsing import validate_duration


def classify_command(
    ctx: typer.Context,
    comparison: str = typer.Option(
        "0", help="Segment duration in the comparison", callback=validate_duration
    ),
    split: str = typer.Option(..., help="Segment duration of this attempt", callback=validate_duration),
    gold: str = typer.Option("0", help="Best segment duration (0 = none recorded)", callback=validate_duration),
    diff: Optional[str] = typer.Option(
        None,
        help="Signed difference to the comparison (default: split - comparison)",
        callback=validate_duration,
    ),
    running: bool = typer.Option(False, help="The segment is still in progress"),
) -> None:
    """Classify a segment as gold, ahead or behind (gaining or losing)."""
    state = get_state(ctx)
    comparison_ms = duration_argument(comparison)
    split_ms = duration_argument(split)
    gold_ms = duration_argument(gold)
    diff_ms = duration_argument(diff) if diff is not None else split_ms - comparison_ms

    result = classify_split(comparison_ms, split_ms, diff_ms, gold_ms, running=running)

    if state.json_output:
        print_json_payload(
            state,
            {
                "classification": result.value,
                "css_classes": result.css_classes,
                "comparison_ms": comparison_ms,
                "split_ms": split_ms,
                "diff_ms": diff_ms,
                "gold_ms": gold_ms,
                "running": running,
            },
        )
        return

    if state.plain_output:
        typer.echo(result.value)
        return

    with state.settings.lock:
        delta = format_signed(diff_ms, state.settings.split)

    state.console.print(Text(result.value, style=result.rich_style), f"({delta})")
