"""Mapping from a final score to a named outcome."""

from enum import Enum
from typing import Optional

from ..config import get_settings
from .validator import MAX_SCORE


class Outcome(Enum):
    """Closed set of results reported to the host."""
    PERFECT = "perfect"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def action_key(self) -> str:
        """Name of the host action triggered by this outcome."""
        return {
            Outcome.PERFECT: "TimelinePerfect",
            Outcome.SUCCESS: "TimelineSuccess",
            Outcome.FAILED: "TimelineFailed",
        }[self]


def interpret_score(score: int, success_threshold: Optional[int] = None) -> Outcome:
    """100 is perfect, at least the threshold (70 by default) is a success."""
    threshold = get_settings().success_threshold if success_threshold is None else success_threshold
    if score == MAX_SCORE:
        return Outcome.PERFECT
    if score >= threshold:
        return Outcome.SUCCESS
    return Outcome.FAILED
