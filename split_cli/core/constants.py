"""Static constants and mappings for the splits CLI."""

from __future__ import annotations

MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000

# Mirrors a FormatSpec with every field visible and two decimal places.
DEFAULT_TIME_FORMAT = "h:m:s.dd"
FALLBACK_PATTERN = "s"
EMPTY_TIME = "--"

MAX_DECIMAL_PLACES = 9

PERSONAL_BEST = "Personal Best"
BEST_SEGMENTS = "Best Segments"
DEFAULT_COMPARISON_LABEL = "PB"

SPLIT_FORMATS = ("Diff", "Time")
TIMING_METHODS = ("real-time", "game-time")
FORMAT_SPEC_NAMES = ("timer", "split", "segment")

SIGN_AHEAD = "-"
SIGN_BEHIND = "+"
SIGN_EVEN = "~"

CURRENT_SEGMENT_CLASS = "current-segment"

CSS_CLASSES = {
    "gold": ["goldsplit"],
    "ahead-gaining": ["greensplit"],
    "ahead-losing": ["lostgreensplit"],
    "behind-gaining": ["gainedredsplit"],
    "behind-losing": ["redsplit"],
    "none": [],
}

RICH_STYLES = {
    "gold": "bold yellow",
    "ahead-gaining": "bold green",
    "ahead-losing": "green",
    "behind-gaining": "red",
    "behind-losing": "bold red",
    "none": "",
}

CURRENT_SEGMENT_STYLE = "reverse"
