from split_cli.core.classify import classification_classes, classify_split
from split_cli.core.models import SplitClassification


def test_missing_gold_is_always_gold() -> None:
    for diff in (-1_000, 0, 1_000):
        assert classify_split(10_000, 12_000, diff, 0) is SplitClassification.GOLD


def test_faster_than_gold_is_gold() -> None:
    assert classify_split(10_000, 7_900, -2_100, 8_000) is SplitClassification.GOLD


def test_running_segment_is_never_gold() -> None:
    result = classify_split(10_000, 7_000, -3_000, 0, running=True)
    assert result is SplitClassification.AHEAD_GAINING


def test_ahead_and_gaining() -> None:
    result = classify_split(10_000, 9_000, -1_000, 8_000)
    assert result is SplitClassification.AHEAD_GAINING


def test_ahead_but_losing() -> None:
    # Still ahead overall, but this segment was slower than the comparison.
    result = classify_split(10_000, 10_500, -400, 8_000)
    assert result is SplitClassification.AHEAD_LOSING


def test_behind_but_gaining() -> None:
    result = classify_split(10_000, 9_500, 2_000, 8_000)
    assert result is SplitClassification.BEHIND_GAINING


def test_behind_and_losing() -> None:
    result = classify_split(10_000, 11_000, 500, 8_000)
    assert result is SplitClassification.BEHIND_LOSING


def test_equal_pace_counts_as_gaining() -> None:
    assert classify_split(10_000, 10_000, -1, 8_000) is SplitClassification.AHEAD_GAINING
    assert classify_split(10_000, 10_000, 1, 8_000) is SplitClassification.BEHIND_GAINING


def test_even_diff_is_none() -> None:
    assert classify_split(10_000, 10_000, 0, 8_000) is SplitClassification.NONE


def test_missing_comparison_treated_as_zero() -> None:
    result = classify_split(0, 9_000, 9_000, 8_000)
    assert result is SplitClassification.BEHIND_LOSING


def test_classification_classes() -> None:
    assert classification_classes(SplitClassification.GOLD) == ["goldsplit"]
    assert classification_classes(SplitClassification.AHEAD_LOSING) == ["lostgreensplit"]
    assert classification_classes(SplitClassification.NONE, current=True) == ["current-segment"]


def test_classification_values_are_tags() -> None:
    assert [item.value for item in SplitClassification] == [
        "gold",
        "ahead-gaining",
        "ahead-losing",
        "behind-gaining",
        "behind-losing",
        "none",
    ]
