"""
Condition catalog.

Maps every ConditionName to an atomic predicate over an Entry. The table is
built once per configuration and must cover the whole enum.
"""

from typing import Any, Callable, Dict, List

from activityfilter.core.config.models import AppConfig
from activityfilter.core.exceptions import ErrorCode, EvaluationError
from activityfilter.entries import Entry
from activityfilter.filters.base import ConditionName
from activityfilter.filters.matcher import StringMatcher

Predicate = Callable[[Entry], bool]


class ConditionCatalog:
    """
    Registry of atomic removal predicates.

    An atomic predicate answers "does this entry match the removal
    criterion", ignoring the reversal flag. All predicates are total.
    """

    def __init__(self, config: AppConfig, matcher: StringMatcher = None):
        self.config = config
        self.matcher = matcher or StringMatcher()

        self._predicates: Dict[ConditionName, Predicate] = {
            ConditionName.UNCOMMENTED: self._uncommented,
            ConditionName.UNLIKED: self._unliked,
            ConditionName.TEXT: self._text,
            ConditionName.IMAGES: self._image,
            ConditionName.VIDEOS: self._video,
            ConditionName.CONTAINS_STRINGS: self._contains_strings,
        }

        missing = [name.value for name in ConditionName if name not in self._predicates]
        if missing:
            raise EvaluationError(
                f"Condition catalog is missing predicates for: {', '.join(missing)}",
                error_code=ErrorCode.EVALUATION_INCOMPLETE_CATALOG,
            )

    @staticmethod
    def _uncommented(entry: Entry) -> bool:
        return not entry.has_comments

    @staticmethod
    def _unliked(entry: Entry) -> bool:
        return not entry.has_likes

    @staticmethod
    def _image(entry: Entry) -> bool:
        return entry.has_image

    @staticmethod
    def _video(entry: Entry) -> bool:
        return entry.has_video

    def _text(self, entry: Entry) -> bool:
        return entry.is_text_only and not self._image(entry) and not self._video(entry)

    def _contains_strings(self, entry: Entry) -> bool:
        return self.matcher.matches(
            entry.text,
            self.config.remove.contains_strings,
            self.config.options.case_sensitive,
        )

    def atomic(self, name: ConditionName, entry: Entry) -> bool:
        """
        Evaluate a condition against an entry, ignoring reversal.

        Args:
            name: Condition to evaluate
            entry: Entry to check

        Returns:
            True if the entry matches the removal criterion
        """
        try:
            predicate = self._predicates[ConditionName(name)]
        except (KeyError, ValueError):
            raise EvaluationError(
                f"Unknown condition: {name}",
                error_code=ErrorCode.EVALUATION_UNKNOWN_CONDITION,
                condition=str(name),
            )
        return predicate(entry)

    def effective(self, name: ConditionName, entry: Entry, reverse: bool) -> bool:
        """
        Evaluate a condition after applying the reversal flag.

        An unconfigured string condition never triggers, reversed or not.
        """
        if name is ConditionName.CONTAINS_STRINGS and not self.is_enabled(name):
            return False
        value = self.atomic(name, entry)
        return not value if reverse else value

    def matched_terms(self, entry: Entry) -> List[Any]:
        """Configured term groups found in the entry text, in configuration order."""
        return self.matcher.matching_groups(
            entry.text,
            self.config.remove.contains_strings,
            self.config.options.case_sensitive,
        )

    def is_enabled(self, name: ConditionName) -> bool:
        """Whether a condition is enabled for independent evaluation."""
        return self.config.remove.is_enabled(name)

    def __iter__(self):
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)
