"""
Condition Engine Base Types

Defines the tri-state result of linked condition groups and the decision
object returned for every evaluated entry. ConditionName is re-exported
from the core package for convenience.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from activityfilter.core.conditions import ConditionName


class LinkedResult(Enum):
    """Aggregated outcome of all linked condition groups."""
    NONE = "none"    # No linked groups configured
    TRUE = "true"    # Linked groups vote for removal
    FALSE = "false"  # Linked groups vote against removal


@dataclass
class FilterDecision:
    """
    Result of evaluating one entry against the rule set.

    Attributes:
        remove: Whether the entry should be discarded
        reason: Human-readable reason for the decision
        linked_result: Aggregated result of the linked groups
        triggered: Independent conditions whose effective value was true
        metadata: Additional evaluation details
    """
    remove: bool
    reason: str = ""
    linked_result: LinkedResult = LinkedResult.NONE
    triggered: Tuple[ConditionName, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def keep(self) -> bool:
        """Whether the entry is kept."""
        return not self.remove

    def to_dict(self) -> Dict[str, Any]:
        """Convert decision to a JSON-friendly dictionary."""
        return {
            'remove': self.remove,
            'reason': self.reason,
            'linked_result': self.linked_result.value,
            'triggered': [name.value for name in self.triggered],
            'metadata': self.metadata,
        }

