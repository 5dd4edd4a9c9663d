"""
Condition evaluator.

Combines independent conditions, linked condition groups and the global
reversal flag into a single keep/discard decision per entry.

Normal mode removes an entry when any linked group holds completely or any
independent condition holds. Reversed mode keeps only entries the normal
rule set would have removed: every atomic condition is inverted, linked
groups switch from all() to any(), and every applicable check has to agree
before an entry is removed.
"""

import logging
from typing import FrozenSet, List, Optional, Tuple

from activityfilter.core.config.models import AppConfig, LinkedGroups
from activityfilter.entries import Entry
from activityfilter.filters.base import ConditionName, FilterDecision, LinkedResult
from activityfilter.filters.catalog import ConditionCatalog


class ConditionEvaluator:
    """
    Decide per entry whether to keep or discard it.

    The evaluator receives its configuration at construction and owns the
    accepted-entry counter used by the load-more controller. Decisions are
    pure functions of (entry, config); only evaluate() touches the counter.
    """

    def __init__(self, config: AppConfig, catalog: Optional[ConditionCatalog] = None):
        """
        Initialize the evaluator.

        Args:
            config: Validated configuration, treated as immutable
            catalog: Condition catalog (built from config if omitted)
        """
        self.config = config
        self.catalog = catalog or ConditionCatalog(config)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.reverse: bool = config.options.reverse_conditions
        self.linked_groups: LinkedGroups = config.options.linked_groups
        self.linked_flat: FrozenSet[ConditionName] = config.options.linked_flat
        self.independent: Tuple[ConditionName, ...] = tuple(
            name for name in ConditionName
            if self.catalog.is_enabled(name) and name not in self.linked_flat
        )
        self._accepted_count = 0

    @property
    def accepted_count(self) -> int:
        """Number of entries kept since the last cycle reset."""
        return self._accepted_count

    def reset_cycle(self) -> None:
        """Reset the accepted counter at a pagination cycle boundary."""
        self.logger.debug(f"Cycle reset after {self._accepted_count} accepted entries")
        self._accepted_count = 0

    def _check_group(self, group: FrozenSet[ConditionName], entry: Entry) -> bool:
        # Iterate in enum order so evaluation order does not depend on set hashing
        values = (self.catalog.effective(name, entry, self.reverse)
                  for name in ConditionName if name in group)
        if self.reverse:
            return any(values)
        return all(values)

    def linked_result(self, entry: Entry) -> LinkedResult:
        """
        Aggregate all linked groups into a tri-state result.

        Args:
            entry: Entry to check

        Returns:
            NONE if nothing is linked, TRUE if at least one group holds (and,
            when reversed, none fails), FALSE otherwise
        """
        if not self.linked_flat:
            return LinkedResult.NONE

        results = [self._check_group(group, entry) for group in self.linked_groups]

        if True in results and (not self.reverse or False not in results):
            return LinkedResult.TRUE
        return LinkedResult.FALSE

    def decide(self, entry: Entry) -> FilterDecision:
        """
        Compute the decision for an entry without touching the counter.

        Args:
            entry: Entry to classify

        Returns:
            FilterDecision describing whether to remove the entry and why
        """
        linked = self.linked_result(entry)
        checked: List[Tuple[ConditionName, bool]] = [
            (name, self.catalog.effective(name, entry, self.reverse))
            for name in self.independent
        ]
        triggered = tuple(name for name, value in checked if value)
        vetoed = tuple(name for name, value in checked if not value)

        if self.reverse:
            remove = (
                linked is not LinkedResult.FALSE
                and not vetoed
                and (linked is LinkedResult.TRUE or bool(triggered))
            )
        else:
            remove = linked is LinkedResult.TRUE or bool(triggered)

        decision = FilterDecision(
            remove=remove,
            reason=self._reason(remove, linked, triggered, vetoed),
            linked_result=linked,
            triggered=triggered,
            metadata={
                "entry_id": entry.id,
                "reversed": self.reverse,
                "checked": [name.value for name, _ in checked],
                "vetoed_by": [name.value for name in vetoed],
                "skipped": sorted(name.value for name in self.linked_flat),
                "matched_terms": self.catalog.matched_terms(entry),
            },
        )
        self.logger.debug(f"Entry {entry.id or '<unnamed>'}: {decision.reason}")
        return decision

    def _reason(self, remove: bool, linked: LinkedResult,
                triggered: Tuple[ConditionName, ...], vetoed: Tuple[ConditionName, ...]) -> str:
        names = ", ".join(name.value for name in triggered)
        if not self.reverse:
            if linked is LinkedResult.TRUE:
                return "Removed: linked conditions matched"
            if remove:
                return f"Removed: matched {names}"
            return "Kept: no condition matched"

        if remove:
            if linked is LinkedResult.TRUE and not triggered:
                return "Removed: outside reversed linked conditions"
            return "Removed: outside reversed conditions"
        if linked is LinkedResult.FALSE:
            return "Kept: reversed linked conditions matched"
        if vetoed:
            return f"Kept: matched {', '.join(name.value for name in vetoed)}"
        return "Kept: no reversed condition applies"

    def should_remove(self, entry: Entry) -> bool:
        """Pure shortcut returning only the removal flag."""
        return self.decide(entry).remove

    def classify(self, entry: Entry) -> FilterDecision:
        """Decide on an entry and count it when kept."""
        decision = self.decide(entry)
        if not decision.remove:
            self._accepted_count += 1
        return decision

    def evaluate(self, entry: Entry) -> bool:
        """
        Classify an entry and count it when kept.

        Args:
            entry: Entry to classify

        Returns:
            True if the entry should be discarded
        """
        return self.classify(entry).remove
