"""Per-refresh display data computed from a timer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from split_cli.core.classify import classify_split
from split_cli.core.constants import BEST_SEGMENTS, EMPTY_TIME
from split_cli.core.models import (
    DisplaySettings,
    InfoLine,
    SplitRow,
    TimerReadout,
)
from split_cli.core.timer import (
    TimerSource,
    best_segment_duration,
    current_duration,
    pick_time,
    previous_values,
    saturating_sub,
    segment_comparison_time,
    segment_split_time,
)
from split_cli.utils.formatting import (
    format_signed,
    format_split_time,
    format_timer,
    format_with_spec,
    split_readout,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Everything the splits view shows for one refresh tick."""

    rows: List[SplitRow]
    current_info: List[InfoLine]
    previous_info: List[InfoLine]
    readout: TimerReadout
    game_name: str = ""
    category_name: str = ""
    phase: str = ""


def _segment_comparison_duration(comparison_time: int, previous_comparison: int) -> int:
    # Later comparison splits can be shorter than earlier ones in odd runs.
    return abs(comparison_time - previous_comparison)


def compute_segment_row(timer: TimerSource, settings: DisplaySettings, index: int) -> SplitRow:
    """Compute the display row for the segment at ``index``."""
    segment = timer.segments[index]
    current_index = timer.current_split_index
    value = format_split_time(segment.comparison(timer.current_comparison), timer, settings)

    if current_index is None or index > current_index:
        return SplitRow(index=index, name=segment.name, value=value)

    comparison_time = segment_comparison_time(segment, timer, settings)
    previous_comparison, previous_split = previous_values(timer, settings, index)
    comparison_duration = _segment_comparison_duration(comparison_time, previous_comparison)
    gold = best_segment_duration(segment, timer, settings)

    if index == current_index:
        running_total = current_duration(timer, settings)
        diff = running_total - comparison_time
        running_time = running_total if index == 0 else saturating_sub(running_total, previous_split)

        # Show the live delta once behind, or once the segment can no longer gold.
        if diff > 0 or (gold != 0 and running_time >= gold):
            return SplitRow(
                index=index,
                name=segment.name,
                value=format_signed(diff, settings.split),
                classification=classify_split(
                    comparison_duration, running_time, diff, gold, running=True
                ),
                current=True,
            )
        return SplitRow(index=index, name=segment.name, value=value, current=True)

    split_value = pick_time(segment.split_time, timer, settings)
    if split_value is None:
        # Skipped split.
        return SplitRow(index=index, name=segment.name, value=EMPTY_TIME)

    diff = split_value - comparison_time
    if settings.split_format == "Time":
        value = format_split_time(segment.split_time, timer, settings)
    else:
        value = format_signed(diff, settings.split)

    return SplitRow(
        index=index,
        name=segment.name,
        value=value,
        classification=classify_split(
            comparison_duration,
            saturating_sub(split_value, previous_split),
            diff,
            gold,
            running=False,
        ),
    )


def compute_split_rows(timer: TimerSource, settings: DisplaySettings) -> List[SplitRow]:
    return [compute_segment_row(timer, settings, index) for index in range(len(timer.segments))]


def _current_index(timer: TimerSource) -> int:
    index = timer.current_split_index or 0
    return min(index, max(len(timer.segments) - 1, 0))


def current_segment_info(timer: TimerSource, settings: DisplaySettings) -> List[InfoLine]:
    """Best and comparison durations for the segment in progress."""
    if not timer.segments:
        return []
    index = _current_index(timer)
    segment = timer.segments[index]

    previous_comparison, _ = previous_values(timer, settings, index)
    comparison = pick_time(segment.comparison(timer.current_comparison), timer, settings)
    if comparison is None:
        comparison_text = EMPTY_TIME
    else:
        comparison_text = format_with_spec(
            _segment_comparison_duration(comparison, previous_comparison),
            settings.segment,
        )

    return [
        InfoLine(
            label="Best",
            value=format_split_time(segment.best_segment_time, timer, settings, settings.segment),
        ),
        InfoLine(label=settings.comparison, value=comparison_text),
    ]


def _previous_segment_line(
    timer: TimerSource,
    settings: DisplaySettings,
    label: str,
    comparison: Optional[str],
) -> InfoLine:
    index = timer.current_split_index
    if index is None or index <= 0 or index > len(timer.segments):
        return InfoLine(label=label, value="")

    index -= 1
    segment = timer.segments[index]
    comparison_time = segment_comparison_time(segment, timer, settings, comparison)
    previous_comparison, previous_split = previous_values(timer, settings, index, comparison)
    comparison_duration = _segment_comparison_duration(comparison_time, previous_comparison)

    split_time = segment_split_time(segment, timer, settings)
    if split_time == 0 or comparison_time == 0:
        return InfoLine(label=label, value="")

    split_duration = saturating_sub(split_time, previous_split)
    diff = split_duration - comparison_duration
    return InfoLine(
        label=label,
        value=format_signed(diff, settings.segment),
        classification=classify_split(
            comparison_duration,
            split_duration,
            diff,
            best_segment_duration(segment, timer, settings),
            running=False,
        ),
    )


def previous_segment_diff(timer: TimerSource, settings: DisplaySettings) -> InfoLine:
    """Time gained or lost in the last finished segment against the comparison."""
    return _previous_segment_line(timer, settings, "Previous Segment", None)


def previous_segment_best(timer: TimerSource, settings: DisplaySettings) -> InfoLine:
    """Time gained or lost in the last finished segment against best segments."""
    return _previous_segment_line(timer, settings, "Previous Segment (Best)", BEST_SEGMENTS)


def timer_readout(timer: TimerSource, settings: DisplaySettings) -> TimerReadout:
    return split_readout(format_timer(timer, settings))


def render_frame(timer: TimerSource, settings: DisplaySettings) -> Frame:
    """Compute one refresh tick while holding the settings lock."""
    with settings.lock:
        rows = compute_split_rows(timer, settings)
        frame = Frame(
            rows=rows,
            current_info=current_segment_info(timer, settings),
            previous_info=[
                previous_segment_diff(timer, settings),
                previous_segment_best(timer, settings),
            ],
            readout=timer_readout(timer, settings),
            game_name=timer.game_name,
            category_name=timer.category_name,
            phase=timer.phase.value,
        )
    logger.debug(
        "Rendered %d rows, current index %s, readout %s",
        len(rows),
        timer.current_split_index,
        frame.readout.text,
    )
    return frame
