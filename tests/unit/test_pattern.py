from __future__ import annotations

import pytest

from split_cli.core.models import FormatSpec
from split_cli.core.pattern import (
    MagnitudeBucket,
    VisibleFields,
    bucket_for,
    compute_pattern,
    compute_resolution,
    invalidate_pattern,
    resolve_pattern,
    visible_fields,
)


def _spec(**overrides) -> FormatSpec:
    return FormatSpec(**overrides)


def test_default_spec_resolves_full_pattern() -> None:
    assert resolve_pattern(FormatSpec()) == "h:m:s.dd"


def test_static_pattern_ignores_duration() -> None:
    spec = _spec()
    for total in (None, 500, 65_000, 3_700_000):
        assert compute_pattern(spec, total) == "h:m:s.dd"


def test_static_min_sec_without_decimals() -> None:
    spec = _spec(show_hours=False, show_decimals=False, decimal_places=3)
    assert compute_pattern(spec) == "m:s"
    assert compute_pattern(spec, 59_999) == "m:s"


def test_static_resolve_memoizes_and_is_idempotent() -> None:
    spec = _spec(show_hours=False)
    first = resolve_pattern(spec)
    assert spec.cached_pattern == first == "m:s.dd"

    # Later flag changes are not seen until the cache is invalidated.
    spec.show_minutes = False
    assert resolve_pattern(spec, 3_700_000) == "m:s.dd"

    invalidate_pattern(spec)
    assert resolve_pattern(spec) == "s.dd"


def test_compute_resolution_reports_cache_update_once() -> None:
    spec = _spec()
    pattern, updated = compute_resolution(spec)
    assert (pattern, updated) == ("h:m:s.dd", "h:m:s.dd")
    assert spec.cached_pattern is None

    spec.cached_pattern = updated
    assert compute_resolution(spec) == ("h:m:s.dd", None)


def test_dynamic_never_writes_cache() -> None:
    spec = _spec(show_hours=False, dynamic=True)
    assert resolve_pattern(spec, 59_500) == "s.dd"
    assert spec.cached_pattern is None
    assert resolve_pattern(spec, 60_000) == "m:s"


@pytest.mark.parametrize(
    ("total", "expected"),
    [
        (59_500, "s.dd"),
        (60_000, "m:s"),
        (3_599_999, "m:s"),
    ],
)
def test_dynamic_bucketing_without_hours(total: int, expected: str) -> None:
    spec = _spec(show_hours=False, dynamic=True)
    assert resolve_pattern(spec, total) == expected


def test_dynamic_hour_plus_keeps_hours_and_drops_decimals() -> None:
    spec = _spec(dynamic=True)
    assert resolve_pattern(spec, 3_600_000) == "h:m:s"
    assert resolve_pattern(spec, 3_700_000) == "h:m:s"


def test_dynamic_uses_absolute_magnitude() -> None:
    spec = _spec(show_hours=False, dynamic=True)
    assert resolve_pattern(spec, -61_230) == "m:s"
    assert resolve_pattern(spec, -500) == "s.dd"


def test_dynamic_without_duration_uses_static_flags() -> None:
    spec = _spec(show_hours=False, dynamic=True)
    assert resolve_pattern(spec, None) == "m:s.dd"


def test_dynamic_keeps_decimals_when_seconds_hidden() -> None:
    spec = _spec(show_hours=False, show_seconds=False, dynamic=True)
    assert resolve_pattern(spec, 120_000) == "m.dd"


def test_decimal_places_width() -> None:
    spec = _spec(show_hours=False, show_minutes=False, decimal_places=4)
    assert compute_pattern(spec) == "s.dddd"


def test_zero_decimal_places_omits_fraction() -> None:
    assert compute_pattern(_spec(decimal_places=0)) == "h:m:s"


def test_fallback_when_everything_hidden() -> None:
    spec = _spec(
        show_hours=False,
        show_minutes=False,
        show_seconds=False,
        show_decimals=False,
        decimal_places=0,
    )
    assert resolve_pattern(spec) == "s"


def test_fallback_with_decimals_only() -> None:
    spec = _spec(show_hours=False, show_minutes=False, show_seconds=False)
    # Decimals alone still produce ".dd"; no fallback needed.
    assert compute_pattern(spec) == ".dd"


def test_dynamic_under_minute_fallback_keeps_seconds() -> None:
    spec = _spec(show_seconds=False, show_decimals=False, dynamic=True)
    assert resolve_pattern(spec, 5_000) == "s"


def test_bucket_for() -> None:
    assert bucket_for(None) is None
    assert bucket_for(59_999) is MagnitudeBucket.UNDER_MINUTE
    assert bucket_for(60_000) is MagnitudeBucket.UNDER_HOUR
    assert bucket_for(3_600_000) is MagnitudeBucket.HOUR_PLUS


def test_visible_fields_under_hour_suppresses_decimals() -> None:
    fields = visible_fields(MagnitudeBucket.UNDER_HOUR, _spec())
    assert fields == VisibleFields(hours=False, minutes=True, seconds=True, decimals=False)
