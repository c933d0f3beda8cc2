"""Tests for order validation and scoring."""

import pytest

from timeline_engine.errors import InvalidOrderingError
from timeline_engine.timeline.validator import (
    ANCHOR_PENALTY,
    STANDARD_PENALTY,
    ValidationResult,
    generate_feedback,
    position_score,
    timeline_progress,
    validate,
)


@pytest.fixture
def abc(make_item):
    """A(10, anchor), B(20), C(30, anchor) from the worked example."""
    return [
        make_item("A", 10, anchor=True),
        make_item("B", 20),
        make_item("C", 30, anchor=True),
    ]


@pytest.fixture
def six(make_item):
    return [make_item(f"e{h}", h) for h in range(1, 7)]


class TestValidate:
    """Test scoring and error records."""

    def test_canonical_order_is_perfect(self, abc):
        result = validate(["A", "B", "C"], abc)

        assert result.is_correct
        assert result.score == 100
        assert result.errors == []
        assert result.perfect_order == ["A", "B", "C"]
        assert "Perfect" in result.feedback

    def test_worked_example(self, abc):
        result = validate(["C", "B", "A"], abc)

        assert not result.is_correct
        assert result.score == 70
        assert [e.evidence_id for e in result.errors] == ["C", "A"]
        assert all(e.is_anchor_error for e in result.errors)

        first = result.errors[0]
        assert first.expected_position == 2
        assert first.actual_position == 0

    def test_non_anchor_penalty(self, six):
        result = validate(["e2", "e1", "e3", "e4", "e5", "e6"], six)
        assert result.score == 100 - 2 * STANDARD_PENALTY
        assert not any(e.is_anchor_error for e in result.errors)
        assert "repositioned" in result.feedback
        assert result.errors[0].message == "This evidence belongs elsewhere in the timeline"

    def test_anchor_costs_more(self, make_item):
        anchored = [make_item("a", 1, anchor=True), make_item("b", 2)]
        plain = [make_item("a", 1), make_item("b", 2)]

        anchored_result = validate(["b", "a"], anchored)
        plain_result = validate(["b", "a"], plain)

        assert anchored_result.score < plain_result.score
        assert plain_result.score - anchored_result.score == ANCHOR_PENALTY - STANDARD_PENALTY

    def test_anchor_feedback(self, abc):
        result = validate(["C", "B", "A"], abc)
        assert result.feedback.startswith("2 evidence pieces are misplaced, including 2 key events")
        assert result.anchor_error_count == 2

    def test_score_floor(self, make_item):
        items = [make_item(f"a{h:02d}", h, anchor=True) for h in range(12)]
        reversed_ids = [i.id for i in reversed(items)]

        result = validate(reversed_ids, items)

        assert len(result.errors) == 12
        assert result.score == 0

    def test_score_non_increasing_with_errors(self, six):
        orders = [
            ["e1", "e2", "e3", "e4", "e5", "e6"],
            ["e2", "e1", "e3", "e4", "e5", "e6"],
            ["e2", "e1", "e4", "e3", "e5", "e6"],
            ["e2", "e1", "e4", "e3", "e6", "e5"],
        ]
        scores = [validate(order, six).score for order in orders]
        assert scores == sorted(scores, reverse=True)

    def test_evidence_order_does_not_matter(self, abc):
        shuffled = [abc[2], abc[0], abc[1]]
        assert validate(["A", "B", "C"], shuffled).is_correct

    def test_equal_times_follow_input_order(self, make_item):
        items = [make_item("x", 9), make_item("y", 9)]
        assert validate(["x", "y"], items).is_correct
        assert not validate(["y", "x"], items).is_correct

    def test_to_dict_uses_case_keys(self, abc):
        data = validate(["C", "B", "A"], abc).to_dict()

        assert data["isCorrect"] is False
        assert data["perfectOrder"] == ["A", "B", "C"]
        assert data["errors"][0]["evidenceId"] == "C"
        assert data["errors"][0]["isAnchorError"] is True

    def test_from_dict(self, abc):
        result = validate(["B", "A", "C"], abc)
        assert ValidationResult.from_dict(result.to_dict()) == result


class TestInvalidOrderings:
    """Mismatched orderings fail fast."""

    def test_unknown_id(self, abc):
        with pytest.raises(InvalidOrderingError, match="Unknown evidence id") as exc:
            validate(["A", "B", "Z"], abc)
        assert exc.value.evidence_id == "Z"

    def test_duplicate_id(self, abc):
        with pytest.raises(InvalidOrderingError, match="twice"):
            validate(["A", "A", "B"], abc)

    def test_missing_ids(self, abc):
        with pytest.raises(InvalidOrderingError, match="missing: C"):
            validate(["A", "B"], abc)

    def test_is_value_error(self, abc):
        with pytest.raises(ValueError):
            validate(["nope"], abc)

    def test_empty_ordering_of_empty_set(self):
        result = validate([], [])
        assert result.is_correct
        assert result.score == 100


class TestFeedback:
    """Feedback branches, including the one scoring never reaches."""

    def test_excellent_branch(self):
        message = generate_feedback(True, [], 90)
        assert message.startswith("Excellent work!")


class TestProgressHelpers:
    """Position closeness and progress percentage."""

    @pytest.mark.parametrize(
        "expected, actual, score",
        [(3, 3, 10), (3, 4, 7), (4, 3, 7), (1, 3, 5), (0, 7, 2)],
    )
    def test_position_score(self, expected, actual, score):
        assert position_score(expected, actual) == score

    def test_progress(self, six):
        assert timeline_progress(["e1", "e2", "e3", "e4", "e5", "e6"], six) == 100
        assert timeline_progress(["e2", "e1", "e3", "e4", "e5", "e6"], six) == 67

    def test_progress_rounds_half_up(self, make_item):
        items = [make_item(f"e{h}", h) for h in range(1, 9)]
        order = ["e1", "e3", "e2", "e5", "e4", "e7", "e6", "e8"]
        # 2 of 8 correct
        assert timeline_progress(order, items) == 25
        order = ["e1", "e3", "e4", "e2", "e6", "e7", "e8", "e5"]
        # 1 of 8 correct = 12.5
        assert timeline_progress(order, items) == 13

    def test_progress_empty(self, six):
        assert timeline_progress([], six) == 0
