"""Duration formatting against compact patterns.

Supported pattern tokens:

- ``h``               hours (0+)
- ``m``               minutes (0-59)
- ``s``               seconds (0-59)
- ``d`` / ``dd`` ...  fractional seconds, truncated and never rounded

Any other character is a literal (``:``, ``.``). Examples for 1h 2m 3.456s::

    "h:m:s"     -> "1:02:03"
    "h:m:s.d"   -> "1:02:03.4"
    "m:s.ddd"   -> "2:03.456"   (hours are not part of the pattern)
"""

from __future__ import annotations

from datetime import timedelta
from itertools import groupby
from typing import List, Optional, Union

from split_cli.core.constants import (
    DEFAULT_TIME_FORMAT,
    EMPTY_TIME,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    SIGN_AHEAD,
    SIGN_BEHIND,
    SIGN_EVEN,
)
from split_cli.core.models import DisplaySettings, FormatSpec, SplitTime, TimerReadout
from split_cli.core.pattern import resolve_pattern
from split_cli.core.timer import TimerSource, pick_time, readout_duration

Duration = Union[int, float, timedelta]


def to_millis(duration: Duration) -> int:
    """Convert a duration to whole milliseconds, truncating toward zero."""
    if isinstance(duration, timedelta):
        micros = (duration.days * 86_400 + duration.seconds) * 1_000_000 + duration.microseconds
        millis = abs(micros) // 1_000
        return -millis if micros < 0 else millis
    return int(duration)


def _append_number(out: List[str], value: int, always_show: bool) -> None:
    # Leading zero fields are skipped so the output never starts with a separator.
    if value <= 0 and not out and not always_show:
        return
    if out:
        out.append(f"{value:02d}")
    else:
        out.append(str(value))


def _append_fraction(out: List[str], millis: int, width: int) -> None:
    base = f"{millis:03d}"
    if width <= 3:
        out.append(base[:width])
    else:
        out.append(base + "0" * (width - 3))


def render(duration: Duration, pattern: str) -> str:
    """Render the absolute value of ``duration`` with ``pattern``."""
    abs_ms = abs(to_millis(duration))
    hours = abs_ms // MS_PER_HOUR
    minutes = (abs_ms // MS_PER_MINUTE) % 60
    seconds = (abs_ms // MS_PER_SECOND) % 60
    millis = abs_ms % MS_PER_SECOND

    out: List[str] = []
    for char, run in groupby(pattern):
        width = len(list(run))
        if char == "h":
            _append_number(out, hours, always_show=False)
        elif char == "m":
            _append_number(out, minutes, always_show=False)
        elif char == "s":
            _append_number(out, seconds, always_show=True)
        elif char == "d":
            _append_fraction(out, millis, width)
        elif out:
            out.append(char * width)
    return "".join(out)


def format_time_span(duration: Duration, pattern: str = DEFAULT_TIME_FORMAT) -> str:
    """Render ``duration`` with a leading ``-`` when it is negative."""
    ms = to_millis(duration)
    text = render(ms, pattern)
    return f"-{text}" if ms < 0 else text


def format_time_span_opt(duration: Optional[Duration], pattern: str = DEFAULT_TIME_FORMAT) -> str:
    if duration is None:
        return EMPTY_TIME
    return format_time_span(duration, pattern)


def format_duration(duration: Duration) -> str:
    """Render the magnitude of ``duration`` with the default pattern."""
    return render(duration, DEFAULT_TIME_FORMAT)


def format_duration_opt(duration: Optional[Duration]) -> str:
    if duration is None:
        return EMPTY_TIME
    return format_duration(duration)


def format_with_spec(duration: Duration, spec: FormatSpec) -> str:
    """Render ``duration`` with the pattern ``spec`` resolves for its magnitude."""
    ms = to_millis(duration)
    return format_time_span(ms, resolve_pattern(spec, ms))


def delta_sign(diff: Duration) -> str:
    ms = to_millis(diff)
    if ms > 0:
        return SIGN_BEHIND
    if ms < 0:
        return SIGN_AHEAD
    return SIGN_EVEN


def format_delta(diff: Duration, pattern: str = DEFAULT_TIME_FORMAT) -> str:
    """Render a delta as ``+1:02``, ``-0.50`` or ``~0.00``."""
    return delta_sign(diff) + render(diff, pattern)


def format_signed(diff: Duration, spec: FormatSpec) -> str:
    """Render a delta with the pattern ``spec`` resolves for its magnitude."""
    ms = to_millis(diff)
    return format_delta(ms, resolve_pattern(spec, abs(ms)))


def format_split_time(
    time: SplitTime,
    timer: TimerSource,
    settings: DisplaySettings,
    spec: Optional[FormatSpec] = None,
) -> str:
    """Render a split time using the timing method the timer displays."""
    value = pick_time(time, timer, settings)
    if value is None:
        return EMPTY_TIME
    return format_with_spec(value, spec or settings.split)


def format_timer(timer: TimerSource, settings: DisplaySettings) -> str:
    """Main timer readout: attempt plus offset, less pause and load time."""
    return format_with_spec(readout_duration(timer, settings), settings.timer)


def split_readout(text: str) -> TimerReadout:
    """Split ``1:04:05.99`` into ``("1:04:05.", "99")`` at the last dot."""
    head, dot, tail = text.rpartition(".")
    if not dot:
        return TimerReadout(main=text)
    return TimerReadout(main=head + dot, fraction=tail)
