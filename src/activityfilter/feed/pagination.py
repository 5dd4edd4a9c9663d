"""
Load-more controller.

After each batch of new entries the controller either asks the feed for
more entries, until enough entries survived filtering, or ends the cycle and
resets the evaluator's counter. The user can cancel a running cycle.
"""

import logging
from typing import Callable, Optional

from activityfilter.filters.evaluator import ConditionEvaluator


class LoadMoreController:
    """
    Drive the load-more loop for one feed.

    Attributes:
        target_load_count: Entries that should survive per load-more press
        user_pressed: Whether a load-more cycle is active
        cancel_visible: Whether the cancel affordance is shown
    """

    def __init__(self, target_load_count: int, load_more: Optional[Callable[[], None]] = None):
        """
        Initialize the controller.

        Args:
            target_load_count: Minimum number of kept entries per cycle
            load_more: Callback that triggers loading of further entries
        """
        self.target_load_count = target_load_count
        self.load_more = load_more
        self.user_pressed = True
        self.cancel_visible = False
        self.cancelled = False
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def press(self) -> None:
        """Start a cycle, as when the user clicks the load-more button."""
        self.user_pressed = True
        self.cancelled = False
        self.cancel_visible = True

    def cancel(self) -> None:
        """Stop the running cycle."""
        self.user_pressed = False
        self.cancelled = True
        self.cancel_visible = False
        self.logger.info("Load-more cycle cancelled")

    def reset(self) -> None:
        """Return to the idle state."""
        self.user_pressed = False
        self.cancel_visible = False

    def needs_more(self, evaluator: ConditionEvaluator) -> bool:
        """Whether the current cycle still wants more entries."""
        return self.user_pressed and evaluator.accepted_count < self.target_load_count

    def load_more_or_reset(self, evaluator: ConditionEvaluator) -> bool:
        """
        Request more entries or end the cycle.

        Args:
            evaluator: Evaluator whose accepted counter drives the loop

        Returns:
            True if more entries were requested
        """
        if self.needs_more(evaluator):
            self.logger.debug(
                f"Requesting more entries ({evaluator.accepted_count}/{self.target_load_count} kept)"
            )
            if self.load_more is not None:
                self.load_more()
            return True

        evaluator.reset_cycle()
        self.reset()
        return False
