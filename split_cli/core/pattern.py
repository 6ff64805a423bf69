"""Format-pattern resolution from display flags.

A pattern is a compact string such as ``h:m:s.dd`` understood by
:func:`split_cli.utils.formatting.render`. Static specs resolve once and keep
the result in ``FormatSpec.cached_pattern``; dynamic specs adapt the visible
fields to the magnitude of the duration on every call.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional, Tuple

from split_cli.core.constants import FALLBACK_PATTERN, MS_PER_HOUR, MS_PER_MINUTE
from split_cli.core.models import FormatSpec


class MagnitudeBucket(Enum):
    UNDER_MINUTE = "under-minute"
    UNDER_HOUR = "under-hour"
    HOUR_PLUS = "hour-plus"


class VisibleFields(NamedTuple):
    hours: bool
    minutes: bool
    seconds: bool
    decimals: bool


def bucket_for(total_millis: Optional[int]) -> Optional[MagnitudeBucket]:
    """Bucket a duration by absolute magnitude, ``None`` when there is none."""
    if total_millis is None:
        return None
    ms = abs(int(total_millis))
    if ms < MS_PER_MINUTE:
        return MagnitudeBucket.UNDER_MINUTE
    if ms < MS_PER_HOUR:
        return MagnitudeBucket.UNDER_HOUR
    return MagnitudeBucket.HOUR_PLUS


def visible_fields(bucket: Optional[MagnitudeBucket], spec: FormatSpec) -> VisibleFields:
    """Apply magnitude-based visibility rules on top of the configured flags."""
    static = VisibleFields(
        hours=spec.show_hours,
        minutes=spec.show_minutes,
        seconds=spec.show_seconds,
        decimals=spec.show_decimals,
    )
    if bucket is None:
        return static

    if bucket is MagnitudeBucket.UNDER_MINUTE:
        return static._replace(hours=False, minutes=False)

    # Once minutes and seconds are both on screen, decimals are dropped.
    decimals = static.decimals and not (spec.show_minutes and spec.show_seconds)
    if bucket is MagnitudeBucket.UNDER_HOUR:
        return static._replace(hours=False, decimals=decimals)
    return static._replace(decimals=decimals)


def _decimal_suffix(places: int) -> str:
    return "." + "d" * places


def build_pattern(fields: VisibleFields, decimal_places: int) -> str:
    """Join visible fields in h, m, s order; may return an empty string."""
    pattern = ""
    if fields.hours:
        pattern += "h"
    if fields.minutes:
        pattern += (":" if pattern else "") + "m"
    if fields.seconds:
        pattern += (":" if pattern else "") + "s"
    if fields.decimals and decimal_places > 0:
        pattern += _decimal_suffix(decimal_places)
    return pattern


def compute_pattern(spec: FormatSpec, total_millis: Optional[int] = None) -> str:
    """Compute a pattern from ``spec`` without touching its cache."""
    bucket = bucket_for(total_millis) if spec.dynamic else None
    pattern = build_pattern(visible_fields(bucket, spec), spec.decimal_places)
    if pattern:
        return pattern

    # A readout always shows at least seconds.
    if spec.show_seconds and spec.show_decimals and spec.decimal_places > 0:
        return FALLBACK_PATTERN + _decimal_suffix(spec.decimal_places)
    return FALLBACK_PATTERN


def compute_resolution(
    spec: FormatSpec,
    total_millis: Optional[int] = None,
) -> Tuple[str, Optional[str]]:
    """Return ``(pattern, updated_cache)``.

    ``updated_cache`` is the value the owner should store in
    ``spec.cached_pattern``, or ``None`` when the cache must stay as it is.
    """
    if spec.dynamic:
        return compute_pattern(spec, total_millis), None
    if spec.cached_pattern:
        return spec.cached_pattern, None
    pattern = compute_pattern(spec)
    return pattern, pattern


def resolve_pattern(spec: FormatSpec, total_millis: Optional[int] = None) -> str:
    """Resolve the pattern for ``spec``, memoizing static results.

    The caller must have exclusive access to ``spec`` for the duration of the
    call (see ``DisplaySettings.lock``).
    """
    pattern, updated_cache = compute_resolution(spec, total_millis)
    if updated_cache is not None:
        spec.cached_pattern = updated_cache
    return pattern


def invalidate_pattern(spec: FormatSpec) -> None:
    """Forget a memoized pattern after the display flags changed."""
    spec.cached_pattern = None
