"""
Tests for LoadMoreController.
"""

from unittest.mock import Mock

import pytest

from activityfilter.feed.pagination import LoadMoreController
from activityfilter.filters.evaluator import ConditionEvaluator


@pytest.fixture
def evaluator(make_config):
    return ConditionEvaluator(make_config(remove={"uncommented": True}))


class TestLoadMoreController:
    """Test the load-more loop."""

    def test_initial_state(self):
        """Test a new controller starts pressed with cancel hidden."""
        controller = LoadMoreController(target_load_count=2)
        assert controller.user_pressed is True
        assert controller.cancel_visible is False
        assert controller.cancelled is False

    def test_requests_more_until_target(self, evaluator, make_entry):
        """Test more entries are requested below the target."""
        load_more = Mock()
        controller = LoadMoreController(target_load_count=2, load_more=load_more)

        evaluator.evaluate(make_entry())
        assert controller.load_more_or_reset(evaluator) is True
        load_more.assert_called_once_with()
        assert evaluator.accepted_count == 1

    def test_resets_when_target_reached(self, evaluator, make_entry):
        """Test reaching the target resets counter and controller."""
        load_more = Mock()
        controller = LoadMoreController(target_load_count=2, load_more=load_more)

        evaluator.evaluate(make_entry())
        evaluator.evaluate(make_entry())
        assert controller.load_more_or_reset(evaluator) is False

        load_more.assert_not_called()
        assert evaluator.accepted_count == 0
        assert controller.user_pressed is False
        assert controller.cancel_visible is False

    def test_removed_entries_do_not_count(self, evaluator, make_entry):
        """Test removed entries do not count toward the target."""
        controller = LoadMoreController(target_load_count=1)

        evaluator.evaluate(make_entry(has_comments=False))
        assert controller.load_more_or_reset(evaluator) is True

    def test_idle_controller_resets(self, evaluator, make_entry):
        """Test an unpressed controller resets instead of loading."""
        controller = LoadMoreController(target_load_count=5)
        controller.reset()

        evaluator.evaluate(make_entry())
        assert controller.load_more_or_reset(evaluator) is False
        assert evaluator.accepted_count == 0

    def test_press_starts_cycle(self, evaluator):
        """Test pressing shows cancel and starts a new cycle."""
        controller = LoadMoreController(target_load_count=1)
        controller.reset()
        controller.press()

        assert controller.user_pressed is True
        assert controller.cancel_visible is True
        assert controller.needs_more(evaluator) is True

    def test_cancel_stops_cycle(self, evaluator):
        """Test cancelling stops further load requests."""
        load_more = Mock()
        controller = LoadMoreController(target_load_count=3, load_more=load_more)
        controller.press()
        controller.cancel()

        assert controller.cancelled is True
        assert controller.load_more_or_reset(evaluator) is False
        load_more.assert_not_called()

    def test_without_callback(self, evaluator):
        """Test the controller works with no load callback."""
        controller = LoadMoreController(target_load_count=1)
        assert controller.load_more_or_reset(evaluator) is True
