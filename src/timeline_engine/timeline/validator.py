"""Validation of a player's ordering against the chronological truth.

Scoring starts at 100 and loses 15 points per misplaced anchor and 10 per
other misplaced item, floored at 0.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

from ..errors import InvalidOrderingError
from ..models import EvidenceItem
from .chronology import sort_chronologically

logger = logging.getLogger(__name__)

MAX_SCORE = 100
ANCHOR_PENALTY = 15
STANDARD_PENALTY = 10

ANCHOR_ERROR_MESSAGE = "This is a key event - check its timing carefully!"
STANDARD_ERROR_MESSAGE = "This evidence belongs elsewhere in the timeline"


@dataclass
class PlacementError:
    """A single misplaced evidence item."""
    evidence_id: str
    expected_position: int
    actual_position: int
    is_anchor_error: bool
    message: str

    @property
    def penalty(self) -> int:
        return ANCHOR_PENALTY if self.is_anchor_error else STANDARD_PENALTY

    def to_dict(self) -> dict:
        return {
            "evidenceId": self.evidence_id,
            "expectedPosition": self.expected_position,
            "actualPosition": self.actual_position,
            "message": self.message,
            "isAnchorError": self.is_anchor_error,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PlacementError":
        return cls(
            evidence_id=d["evidenceId"],
            expected_position=d["expectedPosition"],
            actual_position=d["actualPosition"],
            is_anchor_error=d.get("isAnchorError", False),
            message=d.get("message", ""),
        )


@dataclass
class ValidationResult:
    """Outcome of checking one ordering."""
    is_correct: bool
    score: int
    errors: list[PlacementError] = field(default_factory=list)
    perfect_order: list[str] = field(default_factory=list)
    feedback: str = ""

    @property
    def anchor_error_count(self) -> int:
        return sum(1 for e in self.errors if e.is_anchor_error)

    def to_dict(self) -> dict:
        return {
            "isCorrect": self.is_correct,
            "score": self.score,
            "errors": [e.to_dict() for e in self.errors],
            "perfectOrder": list(self.perfect_order),
            "feedback": self.feedback,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ValidationResult":
        return cls(
            is_correct=d["isCorrect"],
            score=d["score"],
            errors=[PlacementError.from_dict(e) for e in d.get("errors", [])],
            perfect_order=list(d.get("perfectOrder", [])),
            feedback=d.get("feedback", ""),
        )

    def summary(self) -> str:
        """Generate human-readable summary."""
        icon = "[OK]" if self.is_correct else "[X]"
        lines = [f"{icon} Score: {self.score}/{MAX_SCORE}", self.feedback]
        for error in self.errors:
            marker = "*" if error.is_anchor_error else "-"
            lines.append(
                f"  {marker} {error.evidence_id}: placed {error.actual_position + 1}, "
                f"belongs {error.expected_position + 1}"
            )
        return "\n".join(lines)


def check_same_set(player_order_ids: Sequence[str], evidence_items: Sequence[EvidenceItem]) -> None:
    """Raise InvalidOrderingError unless the ordering is a permutation of the evidence ids."""
    known = {item.id for item in evidence_items}
    seen: set[str] = set()

    for evidence_id in player_order_ids:
        if evidence_id not in known:
            raise InvalidOrderingError(f"Unknown evidence id in ordering: {evidence_id!r}", evidence_id)
        if evidence_id in seen:
            raise InvalidOrderingError(f"Evidence id appears twice in ordering: {evidence_id!r}", evidence_id)
        seen.add(evidence_id)

    if len(player_order_ids) != len(known):
        missing = sorted(known - seen)
        raise InvalidOrderingError(
            f"Ordering has {len(player_order_ids)} items but the evidence has {len(known)} "
            f"(missing: {', '.join(missing)})"
        )


def validate(player_order_ids: Sequence[str], evidence_items: Sequence[EvidenceItem]) -> ValidationResult:
    """Score ``player_order_ids`` against the chronological order of ``evidence_items``."""
    check_same_set(player_order_ids, evidence_items)

    correct_order = sort_chronologically(evidence_items)
    correct_ids = [item.id for item in correct_order]
    expected_positions = {evidence_id: pos for pos, evidence_id in enumerate(correct_ids)}
    by_id = {item.id: item for item in correct_order}

    score = MAX_SCORE
    errors: list[PlacementError] = []

    for actual_pos, evidence_id in enumerate(player_order_ids):
        expected_pos = expected_positions[evidence_id]
        if expected_pos == actual_pos:
            continue

        is_anchor = by_id[evidence_id].is_anchor
        error = PlacementError(
            evidence_id=evidence_id,
            expected_position=expected_pos,
            actual_position=actual_pos,
            is_anchor_error=is_anchor,
            message=ANCHOR_ERROR_MESSAGE if is_anchor else STANDARD_ERROR_MESSAGE,
        )
        errors.append(error)
        score -= error.penalty

    is_correct = not errors
    feedback = generate_feedback(is_correct, errors, score)
    score = max(0, score)

    logger.debug("Validated %d items: score %d, %d misplaced", len(correct_ids), score, len(errors))
    return ValidationResult(
        is_correct=is_correct,
        score=score,
        errors=errors,
        perfect_order=correct_ids,
        feedback=feedback,
    )


def generate_feedback(is_correct: bool, errors: Sequence[PlacementError], score: int) -> str:
    """Pick the feedback message for a validation outcome.

    A correct ordering always scores 100 under the current penalties, so the
    "excellent" branch is only reached if scoring changes.
    """
    if is_correct:
        if score == MAX_SCORE:
            return "Perfect! You've reconstructed the timeline flawlessly on your first try!"
        return "Excellent work! You've successfully arranged the evidence in chronological order!"

    anchor_errors = sum(1 for e in errors if e.is_anchor_error)
    total_errors = len(errors)

    if anchor_errors > 0:
        return (
            f"{total_errors} evidence pieces are misplaced, including {anchor_errors} key events. "
            "Focus on the anchor points!"
        )
    return f"{total_errors} evidence pieces need to be repositioned. Check the timestamps carefully!"


def position_score(expected_position: int, actual_position: int) -> int:
    """Closeness score for one placement: 10 exact, 7 off by one, 5 off by two, else 2."""
    distance = abs(expected_position - actual_position)
    if distance == 0:
        return 10
    if distance == 1:
        return 7
    if distance == 2:
        return 5
    return 2


def timeline_progress(player_order_ids: Sequence[str], evidence_items: Sequence[EvidenceItem]) -> int:
    """Percentage of positions already holding the correct item."""
    if not player_order_ids:
        return 0

    correct_ids = [item.id for item in sort_chronologically(evidence_items)]
    correct_positions = sum(
        1
        for index, evidence_id in enumerate(player_order_ids)
        if index < len(correct_ids) and correct_ids[index] == evidence_id
    )
    # Halves round up
    return math.floor(correct_positions * 100 / len(player_order_ids) + 0.5)
