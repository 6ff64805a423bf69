"""Splits view command."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table
from rich.text import Text

from split_cli.commands.common import frame_to_dict, get_state, load_snapshot, print_json_payload
from split_cli.core.constants import CURRENT_SEGMENT_STYLE
from split_cli.core.rows import render_frame


def show_command(
    ctx: typer.Context,
    snapshot: Path = typer.Argument(..., help="Timer snapshot file (YAML or JSON)"),
) -> None:
    """Show split rows, segment info and the timer readout for a snapshot."""
    state = get_state(ctx)
    timer = load_snapshot(snapshot)
    frame = render_frame(timer, state.settings)

    if state.json_output:
        print_json_payload(state, frame_to_dict(frame))
        return

    if state.plain_output:
        typer.echo("index\tsegment\tvalue\tclassification\tcurrent")
        for row in frame.rows:
            typer.echo(
                "\t".join(
                    [
                        str(row.index),
                        row.name,
                        row.value,
                        row.classification.value,
                        "yes" if row.current else "",
                    ]
                )
            )
        for line in frame.current_info + frame.previous_info:
            typer.echo(f"{line.label}\t{line.value}")
        typer.echo(f"timer\t{frame.readout.text}")
        return

    title = " - ".join(part for part in (frame.game_name, frame.category_name) if part)
    table = Table(title=title or None)
    table.add_column("Segment")
    table.add_column("Time", justify="right")

    for row in frame.rows:
        table.add_row(
            row.name,
            Text(row.value, style=row.classification.rich_style),
            style=CURRENT_SEGMENT_STYLE if row.current else None,
        )

    state.console.print(table)
    for line in frame.current_info:
        state.console.print(Text(f"{line.label}: ", style="bold"), line.value)
    for line in frame.previous_info:
        if line.value:
            state.console.print(
                Text(f"{line.label}: ", style="bold"),
                Text(line.value, style=line.classification.rich_style),
            )
    state.console.print(
        Text(frame.readout.main, style="bold"),
        Text(frame.readout.fraction, style="dim"),
        sep="",
    )
