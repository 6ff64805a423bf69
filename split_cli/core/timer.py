"""Read-only view of the external run/timer and duration arithmetic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

from split_cli.core.constants import PERSONAL_BEST
from split_cli.core.models import (
    DisplaySettings,
    Segment,
    SplitTime,
    TimerPhase,
    TimingMethod,
)


class TimerSource(Protocol):
    """What the formatting and classification code reads from a timer.

    Every duration is in milliseconds. ``current_split_index`` is ``None``
    while no attempt is in progress.
    """

    game_name: str
    category_name: str
    segments: Sequence[Segment]
    current_split_index: Optional[int]
    current_comparison: str
    current_timing_method: TimingMethod
    phase: TimerPhase
    current_attempt_duration: int
    offset: int
    pause_time: Optional[int]
    loading_times: int


@dataclass
class TimerSnapshot:
    """Timer state captured at one instant."""

    segments: List[Segment] = field(default_factory=list)
    game_name: str = ""
    category_name: str = ""
    current_split_index: Optional[int] = None
    current_comparison: str = PERSONAL_BEST
    current_timing_method: TimingMethod = TimingMethod.REAL_TIME
    phase: TimerPhase = TimerPhase.NOT_RUNNING
    current_attempt_duration: int = 0
    offset: int = 0
    pause_time: Optional[int] = None
    loading_times: int = 0


def saturating_sub(left: int, right: int) -> int:
    """Subtract durations, clamping at zero instead of going negative."""
    return max(left - right, 0)


def use_game_time(timer: TimerSource, settings: DisplaySettings) -> bool:
    return (
        settings.timing_method is TimingMethod.GAME_TIME
        or timer.current_timing_method is TimingMethod.GAME_TIME
    )


def pick_time(time: SplitTime, timer: TimerSource, settings: DisplaySettings) -> Optional[int]:
    """Select the game or real time of ``time`` for display."""
    if use_game_time(timer, settings):
        return time.game_time
    return time.real_time


def segment_comparison_time(
    segment: Segment,
    timer: TimerSource,
    settings: DisplaySettings,
    comparison: Optional[str] = None,
) -> int:
    name = comparison or timer.current_comparison
    return pick_time(segment.comparison(name), timer, settings) or 0


def segment_split_time(segment: Segment, timer: TimerSource, settings: DisplaySettings) -> int:
    return pick_time(segment.split_time, timer, settings) or 0


def best_segment_duration(segment: Segment, timer: TimerSource, settings: DisplaySettings) -> int:
    """Gold duration of ``segment``; 0 when no best was ever recorded."""
    return pick_time(segment.best_segment_time, timer, settings) or 0


def previous_values(
    timer: TimerSource,
    settings: DisplaySettings,
    index: int,
    comparison: Optional[str] = None,
) -> Tuple[int, int]:
    """Return the comparison time and split time of the segment before ``index``."""
    if index <= 0:
        return 0, 0
    previous = timer.segments[index - 1]
    return (
        segment_comparison_time(previous, timer, settings, comparison),
        segment_split_time(previous, timer, settings),
    )


def attempt_duration(timer: TimerSource) -> int:
    """Attempt duration including the run offset; negative before zero."""
    return timer.current_attempt_duration + timer.offset


def readout_duration(timer: TimerSource, settings: DisplaySettings) -> int:
    """Time shown on the main readout, keeping the sign of countdown offsets."""
    duration = attempt_duration(timer) - (timer.pause_time or 0)
    if use_game_time(timer, settings):
        duration -= timer.loading_times
    return duration


def current_duration(timer: TimerSource, settings: DisplaySettings) -> int:
    """Running time comparable with split times.

    Pause time is removed, and loading times too when timing by game time.
    """
    duration = saturating_sub(attempt_duration(timer), timer.pause_time or 0)
    if use_game_time(timer, settings):
        duration = saturating_sub(duration, timer.loading_times)
    return duration
