"""Game session state and its transitions.

A session is an explicit, serializable record. Every transition is a pure
function that takes a state and returns a new one; nothing in the timeline
core keeps state between calls.

Board layout: the curated evidence is split between the *pool* (not yet placed)
and the *timeline* (the player's current ordering). Both are stored as id lists.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Union

from .config import get_settings
from .errors import SessionError
from .models import CaseData, EvidenceItem
from .timeline import (
    MAX_HINT_TIER,
    Difficulty,
    Outcome,
    ValidationResult,
    curate,
    generate_hint,
    interpret_score,
    shuffle,
    timeline_progress,
    validate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """Everything a session controller needs to render and advance a game."""
    selected: list[EvidenceItem]
    pool: list[str]
    timeline: list[str] = field(default_factory=list)
    attempts_left: int = 3
    is_complete: bool = False
    validation: Optional[ValidationResult] = None
    hint_count: int = 0
    current_hint: Optional[str] = None
    outcome: Optional[Outcome] = None

    @property
    def items_by_id(self) -> dict[str, EvidenceItem]:
        return {item.id: item for item in self.selected}

    @property
    def timeline_items(self) -> list[EvidenceItem]:
        by_id = self.items_by_id
        return [by_id[evidence_id] for evidence_id in self.timeline]

    @property
    def pool_items(self) -> list[EvidenceItem]:
        by_id = self.items_by_id
        return [by_id[evidence_id] for evidence_id in self.pool]

    @property
    def hints_left(self) -> int:
        return MAX_HINT_TIER - self.hint_count

    @property
    def progress(self) -> int:
        """Percentage of timeline positions holding the right item."""
        return timeline_progress(self.timeline, self.timeline_items)

    def to_dict(self) -> dict:
        return {
            "selected": [item.model_dump(by_alias=True) for item in self.selected],
            "pool": list(self.pool),
            "timeline": list(self.timeline),
            "attempts_left": self.attempts_left,
            "is_complete": self.is_complete,
            "validation": self.validation.to_dict() if self.validation else None,
            "hint_count": self.hint_count,
            "current_hint": self.current_hint,
            "outcome": self.outcome.value if self.outcome else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GameState":
        return cls(
            selected=[EvidenceItem.model_validate(item) for item in d["selected"]],
            pool=list(d["pool"]),
            timeline=list(d.get("timeline", [])),
            attempts_left=d.get("attempts_left", 0),
            is_complete=d.get("is_complete", False),
            validation=ValidationResult.from_dict(d["validation"]) if d.get("validation") else None,
            hint_count=d.get("hint_count", 0),
            current_hint=d.get("current_hint"),
            outcome=Outcome(d["outcome"]) if d.get("outcome") else None,
        )


def start_session(
    case: CaseData,
    difficulty: Union[Difficulty, str, None] = None,
    max_attempts: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Curate the case's evidence and lay it out shuffled in the pool."""
    settings = get_settings()
    tier = Difficulty.parse(difficulty or settings.default_difficulty)
    attempts = settings.max_attempts if max_attempts is None else max_attempts
    if attempts < 1:
        raise SessionError(f"A session needs at least one attempt, got {attempts}")

    selected = curate(case.evidence, tier)
    if not selected:
        raise SessionError(f"Case {case.game_settings.case_title!r} has no playable evidence")

    logger.info("Starting %s session on %r with %d items and %d attempts",
                tier.value, case.game_settings.case_title, len(selected), attempts)
    return GameState(
        selected=selected,
        pool=[item.id for item in shuffle(selected, rng)],
        attempts_left=attempts,
    )


def _require_active(state: GameState) -> None:
    if state.is_complete:
        raise SessionError("The session is already complete")


def move_to_timeline(state: GameState, evidence_id: str, position: Optional[int] = None) -> GameState:
    """Move an item from the pool onto the timeline (appended by default)."""
    _require_active(state)
    if evidence_id not in state.pool:
        raise SessionError(f"Evidence {evidence_id!r} is not in the pool")

    timeline = list(state.timeline)
    if position is None:
        timeline.append(evidence_id)
    else:
        timeline.insert(position, evidence_id)

    return replace(
        state,
        pool=[e for e in state.pool if e != evidence_id],
        timeline=timeline,
        validation=None,
    )


def move_to_pool(state: GameState, evidence_id: str) -> GameState:
    """Take an item off the timeline and put it back in the pool."""
    _require_active(state)
    if evidence_id not in state.timeline:
        raise SessionError(f"Evidence {evidence_id!r} is not on the timeline")

    return replace(
        state,
        pool=[*state.pool, evidence_id],
        timeline=[e for e in state.timeline if e != evidence_id],
        validation=None,
    )


def reorder_timeline(state: GameState, new_order: Sequence[str]) -> GameState:
    """Replace the timeline ordering with a permutation of its current items."""
    _require_active(state)
    if sorted(new_order) != sorted(state.timeline):
        raise SessionError("New order must contain exactly the items already on the timeline")

    return replace(state, timeline=list(new_order), validation=None)


def check_order(state: GameState) -> GameState:
    """Validate the full timeline and spend an attempt if it is wrong.

    Every curated item must be placed first; a partial timeline is refused.

    The session completes when the order is correct or attempts run out; the
    outcome is then derived from the final score.
    """
    _require_active(state)
    if not state.timeline:
        raise SessionError("Place some evidence on the timeline before checking")
    if state.pool:
        raise SessionError(
            f"Place all evidence on the timeline before checking ({len(state.pool)} still in the pool)"
        )

    result = validate(state.timeline, state.timeline_items)
    attempts_left = state.attempts_left if result.is_correct else state.attempts_left - 1
    is_complete = result.is_correct or attempts_left <= 0
    outcome = interpret_score(result.score) if is_complete else None

    logger.info("Checked order: score %d, %d attempts left%s",
                result.score, attempts_left, f", outcome {outcome.value}" if outcome else "")
    return replace(
        state,
        validation=result,
        attempts_left=attempts_left,
        is_complete=is_complete,
        outcome=outcome,
    )


def request_hint(state: GameState, show_hints: Optional[bool] = None) -> GameState:
    """Produce the next hint tier for the current timeline."""
    enabled = get_settings().show_hints if show_hints is None else show_hints
    if not enabled:
        raise SessionError("Hints are disabled for this session")
    _require_active(state)
    if state.hint_count >= MAX_HINT_TIER:
        raise SessionError("No hints left")
    if not state.timeline:
        raise SessionError("Place some evidence on the timeline before asking for a hint")

    tier = state.hint_count + 1
    hint = generate_hint(state.timeline, state.timeline_items, tier)
    return replace(state, hint_count=tier, current_hint=hint)


def reset(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Put everything back in a freshly shuffled pool. Attempts and hints are kept."""
    _require_active(state)
    return replace(
        state,
        pool=[item.id for item in shuffle(state.selected, rng)],
        timeline=[],
        validation=None,
        current_hint=None,
    )


def shuffle_board(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Shuffle both the pool and the timeline."""
    _require_active(state)
    return replace(
        state,
        pool=shuffle(state.pool, rng),
        timeline=shuffle(state.timeline, rng),
        validation=None,
    )
