"""Split classification against comparison and best-segment baselines."""

from __future__ import annotations

from typing import List

from split_cli.core.constants import CURRENT_SEGMENT_CLASS
from split_cli.core.models import SplitClassification


def _pace_label(
    split_duration: int,
    comparison_duration: int,
    gaining: SplitClassification,
    losing: SplitClassification,
) -> SplitClassification:
    if split_duration <= comparison_duration:
        return gaining
    return losing


def classify_split(
    comparison_duration: int,
    split_duration: int,
    diff: int,
    gold_duration: int,
    running: bool = False,
) -> SplitClassification:
    """Classify one segment.

    ``diff`` says whether the attempt is ahead of or behind the comparison;
    comparing ``split_duration`` with ``comparison_duration`` says whether this
    segment itself gained or lost time. Finished segments faster than their
    gold, or without any recorded gold (``gold_duration == 0``), are gold.
    Running segments are never gold since their time is not final.
    """
    if not running and (gold_duration == 0 or split_duration < gold_duration):
        return SplitClassification.GOLD

    if diff < 0:
        return _pace_label(
            split_duration,
            comparison_duration,
            SplitClassification.AHEAD_GAINING,
            SplitClassification.AHEAD_LOSING,
        )
    if diff > 0:
        return _pace_label(
            split_duration,
            comparison_duration,
            SplitClassification.BEHIND_GAINING,
            SplitClassification.BEHIND_LOSING,
        )
    return SplitClassification.NONE


def classification_classes(classification: SplitClassification, current: bool = False) -> List[str]:
    """Style classes for a split label, plus the current-segment marker."""
    classes = classification.css_classes
    if current:
        classes.append(CURRENT_SEGMENT_CLASS)
    return classes
