"""
Condition Engine for Feed Entries

This package decides, per feed entry, whether to keep or discard it. Simple
conditions (uncommented, unliked, text, images, videos, containsStrings) can
be evaluated independently or linked into groups, and a global reversal flag
turns "remove matching entries" into "keep only matching entries".

Key Components:
- ConditionName: Closed set of condition names
- StringMatcher: Nested term-group containment matching
- ConditionCatalog: Atomic predicate per condition
- ConditionEvaluator: Combines everything into one decision
"""

from .base import ConditionName, FilterDecision, LinkedResult
from .matcher import StringMatcher
from .catalog import ConditionCatalog
from .evaluator import ConditionEvaluator

__all__ = [
    "ConditionName",
    "FilterDecision",
    "LinkedResult",
    "StringMatcher",
    "ConditionCatalog",
    "ConditionEvaluator",
]
