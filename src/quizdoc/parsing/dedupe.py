"""
Module: parsing.dedupe

Purpose:
    Remove repeated questions produced by numbering artifacts (the same
    block parsed twice). First occurrence wins; order is preserved.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Set, Tuple

from quizdoc.core.models.questions import FinalizedQuestion

logger = logging.getLogger(__name__)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def question_key(question: FinalizedQuestion) -> Tuple[str, str, str]:
    """(collapsed question, "||"-joined collapsed options, lower-cased answer)."""
    return (
        _collapse(question.question),
        "||".join(_collapse(option) for option in question.options),
        question.correct_answer.strip().lower(),
    )


def dedupe_questions(
    questions: Iterable[FinalizedQuestion],
    *,
    drop_empty: bool = True,
) -> List[FinalizedQuestion]:
    """
    Keep the first question per normalized key.

    Args:
        questions: Finalized questions in document order.
        drop_empty: Also drop questions with no text, options or answer.

    Returns:
        New list; applying it again returns an equal list.
    """
    seen: Set[Tuple[str, str, str]] = set()
    unique: List[FinalizedQuestion] = []
    dropped = 0
    for question in questions:
        key = question_key(question)
        if (drop_empty and not any(key)) or key in seen:
            dropped += 1
            continue
        seen.add(key)
        unique.append(question)
    if dropped:
        logger.debug(f"Dropped {dropped} duplicate or empty questions")
    return unique
