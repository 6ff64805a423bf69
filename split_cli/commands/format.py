"""Duration rendering command."""

from __future__ import annotations

from typing import Optional

import typer

from split_cli.commands.common import duration_argument, get_state, print_json_payload
from split_cli.core.constants import FORMAT_SPEC_NAMES
from split_cli.core.pattern import resolve_pattern
from split_cli.utils.formatting import format_delta, format_time_span
from split_cli.utils.parsing import validate_duration


def format_command(
    ctx: typer.Context,
    duration: str = typer.Argument(
        ...,
        help="Duration to render, e.g. 1:02:03.456, 59.5 or 1500ms (use -- before negatives)",
        callback=validate_duration,
    ),
    pattern: Optional[str] = typer.Option(None, help="Explicit pattern such as m:s.dd"),
    spec_name: Optional[str] = typer.Option(
        None,
        "--spec",
        help="Use a configured format spec: timer|split|segment (default: timer)",
    ),
    signed: bool = typer.Option(False, help="Render as a delta with +, - or ~"),
) -> None:
    """Render a duration with a pattern or a configured format spec."""
    state = get_state(ctx)
    if pattern is not None and spec_name is not None:
        raise typer.BadParameter("--pattern and --spec are mutually exclusive")
    if spec_name is not None and spec_name not in FORMAT_SPEC_NAMES:
        raise typer.BadParameter(f"--spec must be one of: {', '.join(FORMAT_SPEC_NAMES)}")

    millis = duration_argument(duration)
    if pattern is None:
        with state.settings.lock:
            pattern = resolve_pattern(state.settings.spec(spec_name or "timer"), abs(millis))
    if not pattern:
        raise typer.BadParameter("--pattern must not be empty")

    text = format_delta(millis, pattern) if signed else format_time_span(millis, pattern)

    if state.json_output:
        print_json_payload(
            state,
            {"duration_ms": millis, "pattern": pattern, "signed": signed, "text": text},
        )
        return
    typer.echo(text)
