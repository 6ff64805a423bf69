"""Lightweight data models shared by the engine and the commands."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from split_cli.core.constants import (
    CSS_CLASSES,
    DEFAULT_COMPARISON_LABEL,
    RICH_STYLES,
)


class SplitClassification(Enum):
    """How a segment compares against its baselines."""

    GOLD = "gold"
    AHEAD_GAINING = "ahead-gaining"
    AHEAD_LOSING = "ahead-losing"
    BEHIND_GAINING = "behind-gaining"
    BEHIND_LOSING = "behind-losing"
    NONE = "none"

    @property
    def css_classes(self) -> List[str]:
        return list(CSS_CLASSES[self.value])

    @property
    def rich_style(self) -> str:
        return RICH_STYLES[self.value]


class TimingMethod(Enum):
    REAL_TIME = "real-time"
    GAME_TIME = "game-time"


class TimerPhase(Enum):
    NOT_RUNNING = "not-running"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass
class FormatSpec:
    """Display flags for one kind of duration readout.

    ``cached_pattern`` is written only by the pattern resolver. It is kept out
    of the constructor, equality and repr so two specs with the same flags
    compare equal whether or not either has been resolved yet.
    """

    show_hours: bool = True
    show_minutes: bool = True
    show_seconds: bool = True
    show_decimals: bool = True
    decimal_places: int = 2
    dynamic: bool = False
    cached_pattern: Optional[str] = field(default=None, init=False, repr=False, compare=False)


@dataclass(frozen=True)
class SplitTime:
    """A time recorded for both timing methods, in milliseconds."""

    real_time: Optional[int] = None
    game_time: Optional[int] = None

    def for_method(self, method: TimingMethod) -> Optional[int]:
        if method is TimingMethod.GAME_TIME:
            return self.game_time
        return self.real_time


@dataclass(frozen=True)
class Segment:
    """One segment of a run as exposed by the timer."""

    name: str
    comparisons: Dict[str, SplitTime] = field(default_factory=dict)
    best_segment_time: SplitTime = SplitTime()
    split_time: SplitTime = SplitTime()

    def comparison(self, name: str) -> SplitTime:
        return self.comparisons.get(name, SplitTime())


@dataclass(frozen=True)
class SplitRow:
    """Display data for one row of the splits list."""

    index: int
    name: str
    value: str
    classification: SplitClassification = SplitClassification.NONE
    current: bool = False


@dataclass(frozen=True)
class InfoLine:
    label: str
    value: str
    classification: SplitClassification = SplitClassification.NONE


@dataclass(frozen=True)
class TimerReadout:
    """The main timer text split for a large/small label pair."""

    main: str
    fraction: str = ""

    @property
    def text(self) -> str:
        return self.main + self.fraction


@dataclass
class DisplaySettings:
    """Display configuration owning the format specs.

    ``lock`` must be held while resolving patterns from several threads; one
    refresh tick holds it for its whole duration.
    """

    timer: FormatSpec = field(default_factory=FormatSpec)
    split: FormatSpec = field(default_factory=FormatSpec)
    segment: FormatSpec = field(default_factory=FormatSpec)
    comparison: str = DEFAULT_COMPARISON_LABEL
    split_format: str = "Diff"
    timing_method: TimingMethod = TimingMethod.REAL_TIME
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def spec(self, name: str) -> FormatSpec:
        """Return the format spec called ``name`` (timer, split or segment)."""
        if name == "timer":
            return self.timer
        if name == "split":
            return self.split
        if name == "segment":
            return self.segment
        raise KeyError(name)
