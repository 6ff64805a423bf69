"""Parsing helpers for clock text and timer snapshots."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from split_cli.core.constants import (
    BEST_SEGMENTS,
    EMPTY_TIME,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    PERSONAL_BEST,
)
from split_cli.core.models import Segment, SplitTime, TimerPhase, TimingMethod
from split_cli.core.timer import TimerSnapshot

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a timer snapshot cannot be loaded."""


def parse_duration_text(value: str) -> int:
    """Parse ``[-]h:m:s.fff``, ``m:s``, ``s.ff`` or ``1234ms`` into milliseconds.

    Fractions beyond milliseconds are truncated.
    """
    raw = value.strip()
    if not raw:
        raise ValueError("empty duration")

    sign = 1
    if raw[0] in "+-":
        sign = -1 if raw[0] == "-" else 1
        raw = raw[1:]

    if raw.endswith("ms"):
        digits = raw[:-2].strip()
        if not digits.isdigit():
            raise ValueError(f"invalid millisecond value: {value!r}")
        return sign * int(digits)

    clock, _, fraction = raw.partition(".")
    parts = clock.split(":")
    if len(parts) > 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"invalid duration: {value!r}")
    if fraction and not fraction.isdigit():
        raise ValueError(f"invalid fraction in duration: {value!r}")

    numbers = [int(part) for part in parts]
    while len(numbers) < 3:
        numbers.insert(0, 0)
    hours, minutes, seconds = numbers
    millis = int((fraction + "000")[:3]) if fraction else 0

    total = hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + millis
    return sign * total


def validate_duration(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates duration options."""
    if value is None:
        return value
    try:
        parse_duration_text(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid duration '{value}'. Expected e.g. 1:02:03.45, 59.5, -0:05 or 1500ms"
        )
    return value


def parse_time_value(value: Any) -> Optional[int]:
    """Convert a snapshot time (int ms, clock text or null) to milliseconds."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise SnapshotError(f"Invalid time value: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text or text == EMPTY_TIME:
            return None
        try:
            return parse_duration_text(text)
        except ValueError as exc:
            raise SnapshotError(str(exc)) from exc
    raise SnapshotError(f"Invalid time value: {value!r}")


def parse_split_time(value: Any) -> SplitTime:
    """Parse a time given for both methods or as a ``{real, game}`` mapping."""
    if isinstance(value, dict):
        return SplitTime(
            real_time=parse_time_value(value.get("real")),
            game_time=parse_time_value(value.get("game")),
        )
    parsed = parse_time_value(value)
    return SplitTime(real_time=parsed, game_time=parsed)


def _parse_segment(raw: Any, index: int) -> Segment:
    if not isinstance(raw, dict):
        raise SnapshotError(f"Segment {index} must be a mapping")
    comparisons = raw.get("comparisons") or {}
    if not isinstance(comparisons, dict):
        raise SnapshotError(f"Segment {index} comparisons must be a mapping")
    return Segment(
        name=str(raw.get("name") or f"Segment {index + 1}"),
        comparisons={str(key): parse_split_time(value) for key, value in comparisons.items()},
        best_segment_time=parse_split_time(raw.get("best")),
        split_time=parse_split_time(raw.get("split")),
    )


def _running_sum(previous: Optional[int], gold: Optional[int]) -> Optional[int]:
    if previous is None or gold is None:
        return None
    return previous + gold


def with_best_segments(segments: List[Segment]) -> List[Segment]:
    """Add a best-segments comparison (running sum of golds) when missing."""
    if any(BEST_SEGMENTS in segment.comparisons for segment in segments):
        return segments

    real: Optional[int] = 0
    game: Optional[int] = 0
    result: List[Segment] = []
    for segment in segments:
        real = _running_sum(real, segment.best_segment_time.real_time)
        game = _running_sum(game, segment.best_segment_time.game_time)
        comparisons = dict(segment.comparisons)
        comparisons[BEST_SEGMENTS] = SplitTime(real_time=real, game_time=game)
        result.append(
            Segment(
                name=segment.name,
                comparisons=comparisons,
                best_segment_time=segment.best_segment_time,
                split_time=segment.split_time,
            )
        )
    return result


def _parse_enum(enum_type: Any, value: Any, field_name: str) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(item.value for item in enum_type)
        raise SnapshotError(f"{field_name} must be one of {allowed}, got {value!r}")


def snapshot_from_dict(data: Dict[str, Any]) -> TimerSnapshot:
    """Build a TimerSnapshot from decoded YAML/JSON."""
    raw_segments = data.get("segments") or []
    if not isinstance(raw_segments, list):
        raise SnapshotError("segments must be a list")
    segments = with_best_segments(
        [_parse_segment(raw, index) for index, raw in enumerate(raw_segments)]
    )

    index = data.get("current-split-index")
    if index is not None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise SnapshotError(f"current-split-index must be an integer, got {index!r}")
        if not 0 <= index <= len(segments):
            raise SnapshotError(
                f"current-split-index {index} is out of range for {len(segments)} segments"
            )

    phase = _parse_enum(
        TimerPhase,
        data.get("phase") or ("not-running" if index is None else "running"),
        "phase",
    )
    return TimerSnapshot(
        segments=segments,
        game_name=str(data.get("game") or ""),
        category_name=str(data.get("category") or ""),
        current_split_index=index,
        current_comparison=str(data.get("comparison") or PERSONAL_BEST),
        current_timing_method=_parse_enum(
            TimingMethod, data.get("timing-method") or "real-time", "timing-method"
        ),
        phase=phase,
        current_attempt_duration=parse_time_value(data.get("attempt")) or 0,
        offset=parse_time_value(data.get("offset")) or 0,
        pause_time=parse_time_value(data.get("pause-time")),
        loading_times=parse_time_value(data.get("loading-times")) or 0,
    )


def load_timer_snapshot(file_path: Path) -> TimerSnapshot:
    """Load a timer snapshot from a YAML or JSON file."""
    try:
        text = file_path.read_text()
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {file_path}: {exc}") from exc

    try:
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Failed to parse snapshot {file_path}: {exc}") from exc

    if not isinstance(raw_data, dict):
        raise SnapshotError(f"Snapshot {file_path} must contain a mapping at the root")

    snapshot = snapshot_from_dict(raw_data)
    logger.debug(
        "Loaded snapshot %s: %d segments, split index %s",
        file_path,
        len(snapshot.segments),
        snapshot.current_split_index,
    )
    return snapshot
