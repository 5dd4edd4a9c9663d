"""
Feed session.

The event source side of the filter: receives batches of newly arrived
entries for a page, asks the evaluator for a decision per entry, reports
removals through a callback and events, then runs the load-more step.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from activityfilter.core.config.models import AppConfig
from activityfilter.core.events.emitter import EventEmitter
from activityfilter.core.events.types import (
    CycleResetEvent,
    EntryKeptEvent,
    EntryRemovedEvent,
    LoadMoreRequestedEvent,
)
from activityfilter.entries import Entry
from activityfilter.feed.pagination import LoadMoreController
from activityfilter.feed.routing import FeedRouter
from activityfilter.filters.base import FilterDecision
from activityfilter.filters.evaluator import ConditionEvaluator

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of one batch of added entries."""
    url: str
    decisions: List[Tuple[Entry, FilterDecision]] = field(default_factory=list)
    more_requested: bool = False
    accepted_count: int = 0

    @property
    def kept(self) -> List[Entry]:
        return [entry for entry, decision in self.decisions if not decision.remove]

    @property
    def removed(self) -> List[Entry]:
        return [entry for entry, decision in self.decisions if decision.remove]


class FeedSession:
    """
    Wire the evaluator, router and load-more controller together.

    Collaborators are injected; anything omitted is built from the config.
    """

    def __init__(
        self,
        config: AppConfig,
        evaluator: Optional[ConditionEvaluator] = None,
        router: Optional[FeedRouter] = None,
        controller: Optional[LoadMoreController] = None,
        emitter: Optional[EventEmitter] = None,
        on_remove: Optional[Callable[[Entry], None]] = None,
    ):
        self.config = config
        self.evaluator = evaluator or ConditionEvaluator(config)
        self.router = router or FeedRouter(config.run_on)
        self.controller = controller or LoadMoreController(config.options.target_load_count)
        self.emitter = emitter or EventEmitter()
        self.on_remove = on_remove

    def handle_entry(self, entry: Entry) -> FilterDecision:
        """Classify one entry and report the outcome."""
        decision = self.evaluator.classify(entry)

        if decision.remove:
            if self.on_remove is not None:
                self.on_remove(entry)
            self.emitter.emit(EntryRemovedEvent(
                entry_id=entry.id,
                reason=decision.reason,
                linked_result=decision.linked_result.value,
                triggered=[name.value for name in decision.triggered],
            ))
        else:
            self.emitter.emit(EntryKeptEvent(
                entry_id=entry.id,
                reason=decision.reason,
                accepted_count=self.evaluator.accepted_count,
            ))
        return decision

    def handle_batch(self, url: str, entries: Iterable[Entry]) -> Optional[BatchResult]:
        """
        Process entries that arrived together on a page.

        Args:
            url: URL of the page the entries belong to
            entries: Entries in arrival order

        Returns:
            BatchResult, or None when the filter does not run on this URL
        """
        if not self.router.is_allowed_url(url):
            return None

        result = BatchResult(url=url)
        for entry in entries:
            result.decisions.append((entry, self.handle_entry(entry)))

        accepted = self.evaluator.accepted_count
        result.accepted_count = accepted
        result.more_requested = self.controller.load_more_or_reset(self.evaluator)

        if result.more_requested:
            self.emitter.emit(LoadMoreRequestedEvent(
                accepted_count=accepted,
                target_load_count=self.controller.target_load_count,
            ))
        else:
            self.emitter.emit(CycleResetEvent(
                accepted_count=accepted,
                target_load_count=self.controller.target_load_count,
                cancelled=self.controller.cancelled,
                url=url,
            ))

        logger.info(
            f"Processed {len(result.decisions)} entries on {url}: "
            f"{len(result.kept)} kept, {len(result.removed)} removed"
        )
        return result
