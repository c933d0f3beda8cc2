"""Progressive hints about the first misplaced item of an ordering.

Tier 1 names the item sitting in the wrong place, tier 2 names the item that
belongs there and its position, tier 3 adds that item's time.
"""

from typing import Sequence

from ..errors import InvalidOrderingError
from ..models import EvidenceItem
from .chronology import effective_timestamp, format_time_for_display, sort_chronologically

MAX_HINT_TIER = 3

ON_TRACK_HINT = "Hint: You're on the right track! Keep checking the timestamps."


def generate_hint(
    player_order_ids: Sequence[str],
    evidence_items: Sequence[EvidenceItem],
    tier: int,
) -> str:
    """Build the hint for ``tier`` (1-3) from the first position that differs."""
    if tier not in range(1, MAX_HINT_TIER + 1):
        raise ValueError(f"Hint tier must be between 1 and {MAX_HINT_TIER}, got {tier}")

    by_id = {item.id: item for item in evidence_items}
    correct_ids = [item.id for item in sort_chronologically(evidence_items)]

    if len(player_order_ids) > len(correct_ids):
        raise InvalidOrderingError(
            f"Ordering has {len(player_order_ids)} items but the evidence has {len(correct_ids)}"
        )

    for evidence_id in player_order_ids:
        if evidence_id not in by_id:
            raise InvalidOrderingError(f"Unknown evidence id in ordering: {evidence_id!r}", evidence_id)

    for index, evidence_id in enumerate(player_order_ids):
        if evidence_id == correct_ids[index]:
            continue

        misplaced = by_id[evidence_id]
        if tier == 1:
            return f'Hint: The evidence "{misplaced.name}" is not in the correct position.'

        belongs_here = by_id[correct_ids[index]]
        if tier == 2:
            return f'Hint: "{belongs_here.name}" should be in position {index + 1}.'

        time_display = format_time_for_display(effective_timestamp(belongs_here))
        return f'Hint: "{belongs_here.name}" occurred at {time_display}.'

    return ON_TRACK_HINT
