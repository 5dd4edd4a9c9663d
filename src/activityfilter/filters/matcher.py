"""
String containment matching for feed entries.

Term groups are either a single string or a sequence of strings. An entry
text matches when any group matches; a sequence group matches only when
every one of its strings is contained in the text.
"""

from typing import List, Sequence, Union

TermGroup = Union[str, Sequence[str]]


class StringMatcher:
    """
    Evaluate nested term-group containment against entry text.

    Matching is plain substring containment: no regex or escaping
    semantics. Comparison is case-folded unless case sensitivity is requested.
    """

    @staticmethod
    def has_terms(term_groups: Sequence[TermGroup]) -> bool:
        """Whether at least one term is configured across all groups."""
        for group in term_groups:
            if isinstance(group, str):
                return True
            if len(group) > 0:
                return True
        return False

    @staticmethod
    def _contains(text: str, term: str, case_sensitive: bool) -> bool:
        if case_sensitive:
            return term in text
        return term.lower() in text.lower()

    @classmethod
    def group_matches(cls, text: str, group: TermGroup, case_sensitive: bool = False) -> bool:
        """Check a single term group against the text."""
        if isinstance(group, str):
            return cls._contains(text, group, case_sensitive)
        if not group:
            return False
        return all(cls._contains(text, term, case_sensitive) for term in group)

    @classmethod
    def matches(cls, text: str, term_groups: Sequence[TermGroup], case_sensitive: bool = False) -> bool:
        """
        Check whether any term group is contained in the text.

        Args:
            text: Full visible text of the entry
            term_groups: Ordered sequence of term groups
            case_sensitive: Whether comparison is case-sensitive

        Returns:
            True if at least one group matches. An unconfigured sequence
            never matches.
        """
        if not cls.has_terms(term_groups):
            return False
        return any(cls.group_matches(text, group, case_sensitive) for group in term_groups)

    @classmethod
    def matching_groups(cls, text: str, term_groups: Sequence[TermGroup],
                        case_sensitive: bool = False) -> List[TermGroup]:
        """Return the groups that match the text, in configuration order."""
        if not cls.has_terms(term_groups):
            return []
        return [group for group in term_groups if cls.group_matches(text, group, case_sensitive)]
