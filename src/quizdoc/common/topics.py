"""
Module: common.topics

Purpose:
    Topic taxonomy used to label questions. Labels are matched as
    prefixes of question text, longest label first, so a specific label
    ("Linear equations in two variables") always wins over a shorter
    label it starts with ("Linear ...") or a broad domain ("Algebra").

Key Functions:
    - normalise_topic_text(): Case-fold and collapse punctuation
    - TopicTaxonomy.match_prefix(): Longest label at the start of a text
    - TopicTaxonomy.split_topic(): Strip "Main [Sub]" labels off a text
    - TopicTaxonomy.from_json(): Load a custom taxonomy

Key Classes:
    - TopicTaxonomy: Immutable, length-sorted label table
    - TopicMatch: Result of a prefix match

Dependencies:
    - re, json (std)

Used By:
    - parsing.parser: Question-start detection and topic extraction
    - cli: --topics option
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Optional, Pattern, Tuple


__all__ = [
    "SAT_TOPICS",
    "DEFAULT_TAXONOMY",
    "TopicMatch",
    "TopicTaxonomy",
    "normalise_topic_text",
    "strip_topic_separators",
]


SAT_TOPICS: Tuple[str, ...] = (
    "Craft and Structure", "Information and Ideas", "Standard English Conventions",
    "Expression of Ideas", "Words in Context", "Command of Evidence", "Inferences",
    "Central Ideas and Details", "Text Structure", "Purpose", "Algebra", "Advanced Math",
    "Linear equations in one variable", "Linear equations in two variables",
    "Linear functions", "Systems of two linear equations", "Linear inequalities",
    "Nonlinear functions", "Quadratic equations", "Exponential functions", "Polynomials",
    "Radicals", "Rational exponents", "Problem-Solving and Data Analysis",
    "Ratios, rates, proportional relationships", "Percentages", "One-variable data",
    "Two-variable data", "Probability", "Conditional probability",
    "Inference from sample statistics", "Evaluating statistical claims",
    "Geometry and Trigonometry", "Geometry & Trigonometry", "Area and volume",
    "Lines, angles, and triangles", "Right triangles and trigonometry", "Circles",
)

_WORD_RE = re.compile(r"[^\W_]+")
_NON_WORD_RE = re.compile(r"[\W_]+")
_SEPARATOR_RE = re.compile(r"^[,\s.:;\-]+")


def normalise_topic_text(value: Optional[str]) -> str:
    """
    Normalize text for topic comparison.

    Args:
        value: Raw label or line text.

    Returns:
        Case-folded text with every run of punctuation/whitespace collapsed
        to a single space. Empty string if value is empty.

    Example:
        >>> normalise_topic_text("Ratios, rates, proportional relationships")
        'ratios rates proportional relationships'
    """
    if not value:
        return ""
    return _NON_WORD_RE.sub(" ", value.casefold()).strip()


def strip_topic_separators(value: str) -> str:
    """Remove separators (comma, period, colon, dash, spaces) left after a label."""
    return _SEPARATOR_RE.sub("", value).strip()


def _compile_label(label: str) -> Pattern[str]:
    """Anchored pattern matching the label's words with any punctuation between."""
    words = _WORD_RE.findall(label)
    if not words:
        return re.compile(re.escape(label), re.IGNORECASE)
    body = r"[\W_]+".join(re.escape(w) for w in words)
    return re.compile(rf"{body}(?![^\W_])", re.IGNORECASE)


@dataclass(frozen=True)
class TopicMatch:
    """
    A taxonomy label found at the start of a text.

    Attributes:
        label: Canonical taxonomy label.
        end: Index in the searched text just past the matched label.
    """
    label: str
    end: int


class TopicTaxonomy:
    """
    Immutable, length-sorted list of topic labels.

    Built once; the parser only reads it, so one instance can be shared
    by concurrent parse calls.

    Example:
        >>> taxonomy = TopicTaxonomy(["Algebra", "Algebra - Linear functions"])
        >>> taxonomy.match_prefix("Algebra - Linear functions: solve").label
        'Algebra - Linear functions'
    """

    def __init__(self, labels: Iterable[str]):
        seen = set()
        cleaned = []
        for label in labels:
            label = str(label).strip()
            if label and label not in seen:
                seen.add(label)
                cleaned.append(label)
        # sorted() is stable: equal-length labels keep their given order
        self._labels: Tuple[str, ...] = tuple(sorted(cleaned, key=len, reverse=True))
        self._patterns: Tuple[Tuple[str, Pattern[str], str], ...] = tuple(
            (label, _compile_label(label), normalise_topic_text(label))
            for label in self._labels
        )
        self._canonical = {}
        for label, _pattern, norm in self._patterns:
            self._canonical.setdefault(norm, label)

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.canonical(label) is not None

    def __repr__(self) -> str:
        return f"TopicTaxonomy({len(self._labels)} labels)"

    def canonical(self, candidate: str) -> Optional[str]:
        """Return the taxonomy label equal to candidate after normalization."""
        return self._canonical.get(normalise_topic_text(candidate))

    def starts_with_topic(self, line: str) -> Optional[str]:
        """
        Check whether a line's normalized form starts with a label.

        Args:
            line: Raw line text.

        Returns:
            Longest matching label, or None.
        """
        norm_line = normalise_topic_text(line)
        if not norm_line:
            return None
        for label, _pattern, norm in self._patterns:
            if norm and (norm_line == norm or norm_line.startswith(norm + " ")):
                return label
        return None

    def match_prefix(self, text: str, *, exclude: Optional[str] = None) -> Optional[TopicMatch]:
        """
        Find the longest label at the very start of text.

        Args:
            text: Text to search (leading whitespace is not skipped).
            exclude: Label to ignore (used for the sub-topic scan).

        Returns:
            TopicMatch or None if no label starts the text.
        """
        for label, pattern, _norm in self._patterns:
            if label == exclude:
                continue
            match = pattern.match(text)
            if match:
                return TopicMatch(label=label, end=match.end())
        return None

    def split_topic(self, text: str) -> Tuple[Optional[str], str]:
        """
        Strip a leading "Main" or "Main Sub" label pair off text.

        Args:
            text: Question text that may start with topic labels.

        Returns:
            (topic, remainder) where topic is "Main", "Main - Sub", or None
            when no label starts the text (remainder is then text unchanged).

        Example:
            >>> DEFAULT_TAXONOMY.split_topic("Algebra Linear functions, Solve 2x=4")
            ('Algebra - Linear functions', 'Solve 2x=4')
        """
        main = self.match_prefix(text)
        if main is None:
            return None, text
        remainder = strip_topic_separators(text[main.end:])
        sub = self.match_prefix(remainder, exclude=main.label)
        if sub is None:
            return main.label, remainder
        return f"{main.label} - {sub.label}", strip_topic_separators(remainder[sub.end:])

    @classmethod
    def from_json(cls, path: Path) -> TopicTaxonomy:
        """
        Load a taxonomy from JSON.

        Accepts a list of labels, ``{"topics": [...]}``, or a mapping of
        main topic -> list of sub-topics (both levels become labels).

        Raises:
            FileNotFoundError: If path doesn't exist.
            ValueError: If the file is not valid taxonomy JSON.
        """
        return cls(_load_labels(str(path)))


@lru_cache(maxsize=None)
def _load_labels(path: str) -> Tuple[str, ...]:
    """Read label strings from a taxonomy JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid taxonomy JSON in {path}: {e}") from e

    if isinstance(payload, dict) and "topics" in payload:
        payload = payload["topics"]

    labels = []
    if isinstance(payload, list):
        labels.extend(str(item) for item in payload)
    elif isinstance(payload, dict):
        for main, subs in payload.items():
            labels.append(str(main))
            if isinstance(subs, list):
                labels.extend(str(sub) for sub in subs)
    else:
        raise ValueError(f"Taxonomy JSON must be a list or object: {path}")
    return tuple(labels)


DEFAULT_TAXONOMY = TopicTaxonomy(SAT_TOPICS)
