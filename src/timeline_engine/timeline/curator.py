"""Evidence curation by difficulty.

Curation runs in two separate phases:

1. Sort the eligible evidence chronologically and split it into anchors and
   non-anchors (both keep chronological order).
2. Keep every anchor, then fill the remaining slots by striding through the
   non-anchors by index so the picks spread across the whole timeline.

The result is in assembly order (anchors first), not chronological order.
"""

import logging
from enum import Enum
from typing import Iterable, Optional, Union

from ..config import get_settings
from ..models import EvidenceItem
from .chronology import has_resolvable_time, sort_chronologically

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty tiers. Each maps to a target number of evidence items."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        """Accept a Difficulty or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {choices})") from None

    @property
    def target_count(self) -> int:
        """Configured number of items for this tier (8/10/12 by default)."""
        return get_settings().tier_counts[self.value]


def eligible_evidence(items: Iterable[EvidenceItem]) -> list[EvidenceItem]:
    """Visible items with at least one parseable timestamp."""
    return [item for item in items if not item.is_hidden and has_resolvable_time(item)]


def partition_anchors(
    sorted_items: list[EvidenceItem],
) -> tuple[list[EvidenceItem], list[EvidenceItem]]:
    """Split into (anchors, non_anchors), preserving order within each."""
    anchors = [item for item in sorted_items if item.is_anchor]
    non_anchors = [item for item in sorted_items if not item.is_anchor]
    return anchors, non_anchors


def stride_select(items: list[EvidenceItem], count: int) -> list[EvidenceItem]:
    """Pick up to ``count`` items spread evenly by index.

    The step is ``len(items) // count`` (at least 1), starting from index 0.
    """
    if count <= 0 or not items:
        return []

    step = max(1, len(items) // count)
    return [items[i * step] for i in range(count) if i * step < len(items)]


def curate(
    all_items: Iterable[EvidenceItem],
    difficulty: Union[Difficulty, str],
    target_count: Optional[int] = None,
) -> list[EvidenceItem]:
    """Select the evidence subset to present for a difficulty tier.

    Args:
        all_items: Every evidence item of the case
        difficulty: Tier deciding how many items to present
        target_count: Override for the tier's configured count

    Returns:
        All eligible anchors followed by evenly strided non-anchors. If the
        anchors alone exceed the target, only the anchors are returned.
    """
    tier = Difficulty.parse(difficulty)
    sorted_items = sort_chronologically(eligible_evidence(all_items))
    if not sorted_items:
        return []

    anchors, non_anchors = partition_anchors(sorted_items)

    wanted = tier.target_count if target_count is None else target_count
    target = min(wanted, len(sorted_items))
    remaining = target - len(anchors)

    selected = anchors + stride_select(non_anchors, remaining)

    logger.debug(
        "Curated %d/%d items for %s (%d anchors, target %d)",
        len(selected), len(sorted_items), tier.value, len(anchors), target,
    )
    return selected[:max(target, len(anchors))]
