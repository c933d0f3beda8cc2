"""Tests for mapping scores to outcomes."""

import pytest

from timeline_engine.timeline.outcome import Outcome, interpret_score


class TestInterpretScore:
    """100 is perfect, 70 and up is a success, anything else fails."""

    @pytest.mark.parametrize(
        "score, outcome",
        [
            (100, Outcome.PERFECT),
            (99, Outcome.SUCCESS),
            (70, Outcome.SUCCESS),
            (69, Outcome.FAILED),
            (0, Outcome.FAILED),
        ],
    )
    def test_thresholds(self, score, outcome):
        assert interpret_score(score) is outcome

    def test_explicit_threshold(self):
        assert interpret_score(60, success_threshold=50) is Outcome.SUCCESS

    def test_threshold_from_environment(self, monkeypatch):
        monkeypatch.setenv("TLE_SUCCESS_THRESHOLD", "90")
        assert interpret_score(85) is Outcome.FAILED

    def test_action_keys(self):
        assert Outcome.PERFECT.action_key == "TimelinePerfect"
        assert Outcome.SUCCESS.action_key == "TimelineSuccess"
        assert Outcome.FAILED.action_key == "TimelineFailed"
