"""
Tests for CLI Utilities

Tests the option parsers and output helpers used by CLI commands.
"""

import pytest
import typer
from unittest.mock import patch

from activityfilter.cli.utils import (
    handle_keyboard_interrupt,
    parse_link_options,
    parse_remove_options,
    parse_term_options,
    print_warnings,
)


class TestOptionParsers:
    """Test conversion of repeated options into configuration values."""

    def test_term_options(self):
        """Test '+' joins terms into an AND-group."""
        assert parse_term_options(["spoiler", "manga + chapter"]) == ["spoiler", ["manga", "chapter"]]

    def test_term_options_empty(self):
        assert parse_term_options(None) is None
        assert parse_term_options([]) is None

    def test_empty_term_group_rejected(self):
        with pytest.raises(typer.BadParameter):
            parse_term_options(["+"])

    def test_link_options(self):
        """Test each --link value forms one group."""
        assert parse_link_options(["images,videos", "uncommented"]) == [["images", "videos"], ["uncommented"]]
        assert parse_link_options(None) is None

    def test_link_options_unknown_condition(self):
        with pytest.raises(typer.BadParameter) as exc_info:
            parse_link_options(["images,reposts"])
        assert "reposts" in str(exc_info.value)

    def test_remove_options(self):
        assert parse_remove_options(["images", " text "]) == {"images": True, "text": True}
        assert parse_remove_options(None) == {}

    def test_remove_options_reject_strings(self):
        with pytest.raises(typer.BadParameter):
            parse_remove_options(["containsStrings"])


class TestOutputHelpers:
    """Test console helpers."""

    @patch('activityfilter.cli.utils.console')
    def test_print_warnings(self, mock_console):
        print_warnings(["first", "second"])
        assert mock_console.print.call_count == 2
        assert "first" in mock_console.print.call_args_list[0].args[0]

    @patch('activityfilter.cli.utils.console')
    def test_handle_keyboard_interrupt(self, mock_console):
        with pytest.raises(typer.Exit) as exc_info:
            handle_keyboard_interrupt()

        assert exc_info.value.exit_code == 1
        mock_console.print.assert_called_once()
