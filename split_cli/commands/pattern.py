"""Pattern resolution command."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

import typer

from split_cli.commands.common import duration_argument, get_state, print_json_payload
from split_cli.core.constants import FORMAT_SPEC_NAMES, MAX_DECIMAL_PLACES
from split_cli.core.models import FormatSpec
from split_cli.core.pattern import bucket_for, resolve_pattern
from split_cli.utils.parsing import validate_duration


def _override(spec: FormatSpec, **flags: Optional[object]) -> FormatSpec:
    changes = {key: value for key, value in flags.items() if value is not None}
    return replace(spec, **changes)


def pattern_command(
    ctx: typer.Context,
    spec_name: str = typer.Option("timer", "--spec", help="Format spec: timer|split|segment"),
    hours: Optional[bool] = typer.Option(None, "--hours/--no-hours", help="Show hours"),
    minutes: Optional[bool] = typer.Option(None, "--minutes/--no-minutes", help="Show minutes"),
    seconds: Optional[bool] = typer.Option(None, "--seconds/--no-seconds", help="Show seconds"),
    decimals: Optional[bool] = typer.Option(None, "--decimals/--no-decimals", help="Show decimals"),
    decimal_places: Optional[int] = typer.Option(None, help="Number of decimal places (0-9)"),
    dynamic: Optional[bool] = typer.Option(
        None,
        "--dynamic/--static",
        help="Adapt visible fields to the duration magnitude",
    ),
    duration: Optional[str] = typer.Option(
        None,
        help="Duration the pattern is resolved for, e.g. 59.5 or 1:02:03",
        callback=validate_duration,
    ),
) -> None:
    """Resolve the format pattern for the configured display flags."""
    state = get_state(ctx)
    if spec_name not in FORMAT_SPEC_NAMES:
        raise typer.BadParameter(f"--spec must be one of: {', '.join(FORMAT_SPEC_NAMES)}")
    if decimal_places is not None and not 0 <= decimal_places <= MAX_DECIMAL_PLACES:
        raise typer.BadParameter(f"--decimal-places must be between 0 and {MAX_DECIMAL_PLACES}")

    total_millis = duration_argument(duration) if duration is not None else None
    with state.settings.lock:
        spec = _override(
            state.settings.spec(spec_name),
            show_hours=hours,
            show_minutes=minutes,
            show_seconds=seconds,
            show_decimals=decimals,
            decimal_places=decimal_places,
            dynamic=dynamic,
        )
        pattern = resolve_pattern(spec, total_millis)

    if state.json_output:
        bucket = bucket_for(total_millis) if spec.dynamic else None
        print_json_payload(
            state,
            {
                "spec": spec_name,
                "pattern": pattern,
                "dynamic": spec.dynamic,
                "bucket": bucket.value if bucket else None,
                "duration_ms": total_millis,
            },
        )
        return

    if state.plain_output:
        typer.echo(pattern)
        return
    state.console.print(f"[bold]{spec_name}[/bold] pattern: {pattern}")
