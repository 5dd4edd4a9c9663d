"""
Tests for ConditionCatalog.

Checks each atomic predicate and the effect of the reversal flag.
"""

import pytest

from activityfilter.core.exceptions import EvaluationError
from activityfilter.filters.base import ConditionName
from activityfilter.filters.catalog import ConditionCatalog


class TestConditionCatalog:
    """Test atomic predicates."""

    @pytest.fixture
    def catalog(self, make_config):
        return ConditionCatalog(make_config(remove={"containsStrings": ["spoiler"]}))

    def test_covers_every_condition(self, catalog):
        """Test the catalog has a predicate for each of the six conditions."""
        assert set(catalog) == set(ConditionName)
        assert len(catalog) == 6

    def test_uncommented(self, catalog, make_entry):
        """Test uncommented holds only for entries without replies."""
        assert catalog.atomic(ConditionName.UNCOMMENTED, make_entry(has_comments=False)) is True
        assert catalog.atomic(ConditionName.UNCOMMENTED, make_entry(has_comments=True)) is False

    def test_unliked(self, catalog, make_entry):
        """Test unliked holds only for entries without likes."""
        assert catalog.atomic(ConditionName.UNLIKED, make_entry(has_likes=False)) is True
        assert catalog.atomic(ConditionName.UNLIKED, make_entry(has_likes=True)) is False

    def test_images_and_videos(self, catalog, make_entry):
        """Test media predicates follow the image and video flags."""
        assert catalog.atomic(ConditionName.IMAGES, make_entry(has_image=True)) is True
        assert catalog.atomic(ConditionName.IMAGES, make_entry()) is False
        assert catalog.atomic(ConditionName.VIDEOS, make_entry(has_video=True)) is True
        assert catalog.atomic(ConditionName.VIDEOS, make_entry()) is False

    def test_text_requires_text_activity_without_media(self, catalog, make_entry):
        """Test text holds for text activities that carry no media."""
        assert catalog.atomic(ConditionName.TEXT, make_entry(is_text_only=True)) is True
        assert catalog.atomic(ConditionName.TEXT, make_entry(is_text_only=False)) is False
        assert catalog.atomic(ConditionName.TEXT, make_entry(is_text_only=True, has_image=True)) is False
        assert catalog.atomic(ConditionName.TEXT, make_entry(is_text_only=True, has_video=True)) is False

    def test_contains_strings_uses_config(self, catalog, make_entry):
        """Test containsStrings matches the configured terms, ignoring case."""
        assert catalog.atomic(ConditionName.CONTAINS_STRINGS, make_entry(text="Big SPOILER")) is True
        assert catalog.atomic(ConditionName.CONTAINS_STRINGS, make_entry(text="nothing")) is False

    def test_contains_strings_case_sensitive_option(self, make_config, make_entry):
        """Test caseSensitive makes term matching respect case."""
        catalog = ConditionCatalog(make_config(
            remove={"containsStrings": ["spoiler"]},
            options={"caseSensitive": True},
        ))
        assert catalog.atomic(ConditionName.CONTAINS_STRINGS, make_entry(text="Big SPOILER")) is False

    def test_accepts_raw_string_names(self, catalog, make_entry):
        """Test plain string names resolve to conditions."""
        assert catalog.atomic("uncommented", make_entry(has_comments=False)) is True

    def test_unknown_condition_raises(self, catalog, make_entry):
        """Test an unknown name raises EvaluationError."""
        with pytest.raises(EvaluationError):
            catalog.atomic("reposts", make_entry())

    def test_effective_inverts_when_reversed(self, catalog, make_entry):
        """Test the effective value is the negated predicate when reversed."""
        entry = make_entry(has_comments=True)
        assert catalog.effective(ConditionName.UNCOMMENTED, entry, reverse=False) is False
        assert catalog.effective(ConditionName.UNCOMMENTED, entry, reverse=True) is True

    def test_unconfigured_strings_never_trigger(self, make_config, make_entry):
        """Test an empty term list stays false in both modes."""
        catalog = ConditionCatalog(make_config())
        entry = make_entry(text="anything")
        assert catalog.effective(ConditionName.CONTAINS_STRINGS, entry, reverse=False) is False
        assert catalog.effective(ConditionName.CONTAINS_STRINGS, entry, reverse=True) is False

    def test_is_enabled(self, make_config):
        """Test enabled state for flags and the term list."""
        catalog = ConditionCatalog(make_config(remove={"images": True, "containsStrings": ["x"]}))
        assert catalog.is_enabled(ConditionName.IMAGES) is True
        assert catalog.is_enabled(ConditionName.VIDEOS) is False
        assert catalog.is_enabled(ConditionName.CONTAINS_STRINGS) is True

    def test_matched_terms(self, make_config, make_entry):
        """Test matched terms list every group found in the text."""
        catalog = ConditionCatalog(make_config(remove={"containsStrings": [["foo", "bar"], "baz", "qux"]}))
        assert catalog.matched_terms(make_entry(text="Foo bar qux")) == [["foo", "bar"], "qux"]
        assert ConditionCatalog(make_config()).matched_terms(make_entry(text="foo")) == []
