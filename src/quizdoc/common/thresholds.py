"""Centralized threshold and magic number configuration.

All tunable numbers used by the extraction and parsing heuristics live
here. The values were calibrated against real instructor documents;
changing one shifts what the parser accepts, so adjust them together
with a representative document set.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MathThresholds:
    """Thresholds for telling prose typed in the equation editor from math."""

    # More letters than this (and no operator) means the "equation" is prose
    prose_letter_limit: int = 10
    arithmetic_operators: str = "+-*/=<>^×÷±≤≥≠"


@dataclass(frozen=True)
class ParsingThresholds:
    """Thresholds for the line parser and finalizer."""

    # Option markers (A. / B) ...) mid-line need this much whitespace before them
    option_marker_min_gap: int = 2
    max_option_letters: int = 5  # A-E

    # Spurious option pruning only kicks in above this many options
    spurious_option_trigger: int = 4
    max_option_length: int = 300  # Longer "options" are explanation fragments

    # Short "Choice X is (in)correct" lines without a reason are boilerplate
    generic_explanation_max_length: int = 30


MATH_THRESHOLDS = MathThresholds()
PARSING_THRESHOLDS = ParsingThresholds()
