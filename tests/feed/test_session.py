"""
Tests for FeedSession batch handling.
"""

from unittest.mock import Mock

import pytest

from activityfilter.core.events.emitter import EventEmitter
from activityfilter.core.events.types import (
    CycleResetEvent,
    EntryKeptEvent,
    EntryRemovedEvent,
    LoadMoreRequestedEvent,
)
from activityfilter.feed.pagination import LoadMoreController
from activityfilter.feed.session import FeedSession

HOME = "https://anilist.co/home"


@pytest.mark.integration
class TestFeedSession:
    """Test the session wiring of evaluator, router and controller."""

    def setup_method(self):
        self.emitter = EventEmitter()
        self.removed = []

    def make_session(self, config, **kwargs):
        return FeedSession(config, emitter=self.emitter, on_remove=self.removed.append, **kwargs)

    def test_batch_removes_and_keeps(self, make_config, make_entry):
        """Test a batch is split into removed and kept entries."""
        session = self.make_session(make_config(remove={"images": True}))
        photo = make_entry(id="1", has_image=True)
        status = make_entry(id="2")

        result = session.handle_batch(HOME, [photo, status])

        assert result.removed == [photo]
        assert result.kept == [status]
        assert self.removed == [photo]
        assert [e.entry_id for e in self.emitter.get_event_history(EntryRemovedEvent)] == ["1"]
        assert [e.entry_id for e in self.emitter.get_event_history(EntryKeptEvent)] == ["2"]

    def test_removed_event_details(self, make_config, make_entry):
        """Test removal events carry the linked result and reason."""
        session = self.make_session(make_config(options={"linkedConditions": [["images", "videos"]]}))
        session.handle_batch(HOME, [make_entry(id="7", has_image=True, has_video=True)])

        event = self.emitter.get_event_history(EntryRemovedEvent)[0]
        assert event.linked_result == "true"
        assert event.triggered == []
        assert event.reason == "Removed: linked conditions matched"

    def test_disallowed_url_skipped(self, make_config, make_entry):
        """Test batches on disallowed pages are ignored."""
        session = self.make_session(make_config(remove={"images": True}))

        assert session.handle_batch("https://anilist.co/user/someone/", [make_entry(has_image=True)]) is None
        assert self.removed == []
        assert self.emitter.get_event_history() == []

    def test_requests_more_below_target(self, make_config, make_entry):
        """Test a batch below target requests more and emits an event."""
        load_more = Mock()
        config = make_config(remove={"uncommented": True}, options={"targetLoadCount": 3})
        session = self.make_session(config, controller=LoadMoreController(3, load_more))

        result = session.handle_batch(HOME, [make_entry(), make_entry(has_comments=False)])

        assert result.more_requested is True
        assert result.accepted_count == 1
        load_more.assert_called_once_with()
        event = self.emitter.get_event_history(LoadMoreRequestedEvent)[0]
        assert event.accepted_count == 1
        assert event.target_load_count == 3

    def test_cycle_reset_at_target(self, make_config, make_entry):
        """Test reaching the target resets the cycle and emits an event."""
        session = self.make_session(make_config(options={"targetLoadCount": 2}))

        result = session.handle_batch(HOME, [make_entry(), make_entry()])

        assert result.more_requested is False
        assert result.accepted_count == 2
        assert session.evaluator.accepted_count == 0
        event = self.emitter.get_event_history(CycleResetEvent)[0]
        assert event.accepted_count == 2
        assert event.url == HOME
        assert event.cancelled is False

    def test_counter_spans_batches(self, make_config, make_entry):
        """Test kept entries accumulate across batches."""
        session = self.make_session(make_config(options={"targetLoadCount": 2}))

        first = session.handle_batch(HOME, [make_entry()])
        second = session.handle_batch(HOME, [make_entry()])

        assert first.more_requested is True
        assert second.more_requested is False
        assert second.accepted_count == 2

    def test_cancelled_cycle(self, make_config, make_entry):
        """Test a cancelled cycle resets without loading more."""
        session = self.make_session(make_config(options={"targetLoadCount": 5}))
        session.controller.cancel()

        result = session.handle_batch(HOME, [make_entry()])

        assert result.more_requested is False
        assert self.emitter.get_event_history(CycleResetEvent)[0].cancelled is True

    def test_handle_entry_without_callback(self, make_config, make_entry):
        """Test single entries are handled without an on_remove callback."""
        session = FeedSession(make_config(remove={"text": True}))
        decision = session.handle_entry(make_entry(is_text_only=True))

        assert decision.remove is True
        assert session.evaluator.accepted_count == 0
