"""
Module: parsing.options

Purpose:
    Recover lettered answer choices ("A) 12  B) 15", "A. foo") from a
    single line of text.

Key Functions:
    - extract_options(): line -> (leading residual, options)

Dependencies:
    - quizdoc.common.thresholds: Marker gap and letter range

Used By:
    - parsing.parser: Option lines and inline options on question lines
"""

from __future__ import annotations

import re
import string
from typing import List, Match, Tuple

from quizdoc.common.thresholds import PARSING_THRESHOLDS, ParsingThresholds

OPTION_LETTERS = string.ascii_uppercase[:PARSING_THRESHOLDS.max_option_letters]

# Letter + ")" or "." at line start or after whitespace
_MARKER_RE = re.compile(rf"(?:^|(?<=\s))([{OPTION_LETTERS}])([.)])")


def _qualifies(line: str, match: Match[str], thresholds: ParsingThresholds) -> bool:
    """
    Check whether a candidate marker is a real option marker.

    ")" markers qualify after any whitespace. "." markers mid-line need a
    wider gap so "Plan A. Then" is not read as an option.
    """
    start = match.start()
    if start == 0 or match.group(2) == ")":
        return True
    before = line[:start]
    gap = len(before) - len(before.rstrip())
    return gap >= thresholds.option_marker_min_gap


def extract_options(
    line: str,
    collected: int = 0,
    thresholds: ParsingThresholds = PARSING_THRESHOLDS,
) -> Tuple[str, List[str]]:
    """
    Extract a run of consecutive option markers from a line.

    The run must start at the next expected letter (``A`` when nothing is
    collected yet, ``C`` after two options) and continue in strict
    sequence; the first out-of-sequence marker after the run has started
    ends it, and its text stays part of the preceding option.

    Args:
        line: Stripped input line.
        collected: Number of options already collected for the question.
        thresholds: Marker heuristics.

    Returns:
        (residual, options). residual is the text before the first
        accepted marker (stripped); options is empty when no run starts.

    Example:
        >>> extract_options("Solve 2x=4. A) 1 B) 2 C) 3 D) 4")
        ('Solve 2x=4.', ['1', '2', '3', '4'])
        >>> extract_options("A) foo C) bar")
        ('', ['foo C) bar'])
    """
    expected = collected
    accepted: List[Match[str]] = []
    for match in _MARKER_RE.finditer(line):
        if not _qualifies(line, match, thresholds):
            continue
        index = OPTION_LETTERS.index(match.group(1))
        if index != expected:
            if accepted:
                break
            continue
        accepted.append(match)
        expected += 1

    if not accepted:
        return line, []

    residual = line[:accepted[0].start()].strip()
    options = []
    for current, following in zip(accepted, accepted[1:] + [None]):
        end = following.start() if following is not None else len(line)
        options.append(line[current.end():end].strip())
    return residual, options
