"""
Timeline Module

Core timeline reconstruction logic:
- Chronological ordering of evidence (effective time, stable sort)
- Difficulty-based curation that keeps anchor evidence
- Validation and scoring of a player's ordering
- Progressive hints
- Shuffling and outcome mapping
"""

from .chronology import (
    SENTINEL_MILLIS,
    canonical_ids,
    effective_time,
    effective_timestamp,
    format_time_for_display,
    has_resolvable_time,
    sort_chronologically,
)
from .curator import Difficulty, curate, eligible_evidence
from .hints import MAX_HINT_TIER, generate_hint
from .outcome import Outcome, interpret_score
from .shuffle import shuffle
from .validator import (
    PlacementError,
    ValidationResult,
    generate_feedback,
    position_score,
    timeline_progress,
    validate,
)

__all__ = [
    "SENTINEL_MILLIS",
    "canonical_ids",
    "effective_time",
    "effective_timestamp",
    "format_time_for_display",
    "has_resolvable_time",
    "sort_chronologically",
    "Difficulty",
    "curate",
    "eligible_evidence",
    "MAX_HINT_TIER",
    "generate_hint",
    "Outcome",
    "interpret_score",
    "shuffle",
    "PlacementError",
    "ValidationResult",
    "generate_feedback",
    "position_score",
    "timeline_progress",
    "validate",
]
