"""Shared helpers: topic taxonomy and heuristic thresholds."""

from .thresholds import MATH_THRESHOLDS, PARSING_THRESHOLDS
from .topics import DEFAULT_TAXONOMY, SAT_TOPICS, TopicMatch, TopicTaxonomy

__all__ = [
    "DEFAULT_TAXONOMY",
    "MATH_THRESHOLDS",
    "PARSING_THRESHOLDS",
    "SAT_TOPICS",
    "TopicMatch",
    "TopicTaxonomy",
]
