"""
Unit Tests for Option Extraction

Tests for extract_options() marker detection and sequencing.
"""

from quizdoc.common.thresholds import ParsingThresholds
from quizdoc.parsing.options import extract_options


class TestExtractOptions:
    """Tests for extract_options function."""

    def test_extract_when_inline_run_then_residual_and_options(self):
        """Text before the first marker is returned as the residual."""
        residual, options = extract_options("Solve 2x=4. A) 1 B) 2 C) 3 D) 4")

        assert residual == "Solve 2x=4."
        assert options == ["1", "2", "3", "4"]

    def test_extract_when_single_marker_then_one_option(self):
        assert extract_options("A) 12") == ("", ["12"])

    def test_extract_when_sequence_broken_then_rest_joins_previous_option(self):
        """An out-of-order letter ends the run; its text stays in the option."""
        assert extract_options("A) foo C) bar") == ("", ["foo C) bar"])

    def test_extract_when_period_markers_with_wide_gap_then_options(self):
        assert extract_options("A. 12  B. 15") == ("", ["12", "15"])

    def test_extract_when_period_marker_mid_sentence_then_ignored(self):
        """A single space before "X." is not enough for a period marker."""
        line = "Plan A. Then plan B. Go"

        assert extract_options(line) == (line, [])

    def test_extract_when_paren_marker_after_single_space_then_accepted(self):
        assert extract_options("Pick one: A) red B) blue") == ("Pick one:", ["red", "blue"])

    def test_extract_when_options_already_collected_then_continues_sequence(self):
        assert extract_options("C) 7  D) 8", collected=2) == ("", ["7", "8"])

    def test_extract_when_expected_letter_missing_then_no_options(self):
        line = "A) 1  B) 2"

        assert extract_options(line, collected=2) == (line, [])

    def test_extract_when_stray_marker_before_run_then_skipped(self):
        """Markers before the run starts are left in the residual."""
        assert extract_options("B) x A) y") == ("B) x", ["y"])

    def test_extract_when_letter_beyond_range_then_not_marker(self):
        line = "F) not an option"

        assert extract_options(line) == (line, [])

    def test_extract_when_lowercase_letter_then_not_marker(self):
        line = "a) lowercase"

        assert extract_options(line) == (line, [])

    def test_extract_when_letter_inside_word_then_not_marker(self):
        line = "Vitamin D) deficiency"

        assert extract_options(line) == (line, [])

    def test_extract_when_custom_gap_then_used(self):
        """A smaller gap threshold accepts single-spaced period markers."""
        thresholds = ParsingThresholds(option_marker_min_gap=1)

        assert extract_options("A. 1 B. 2", thresholds=thresholds) == ("", ["1", "2"])
