"""
ActivityFilter

Keep or discard activity-feed entries according to a configurable rule set
of independent conditions, linked condition groups and a reversal flag.
"""

__version__ = "1.8.1"

from activityfilter.entries import Entry
from activityfilter.filters import ConditionEvaluator, ConditionName, FilterDecision

__all__ = [
    "__version__",
    "Entry",
    "ConditionEvaluator",
    "ConditionName",
    "FilterDecision",
]
