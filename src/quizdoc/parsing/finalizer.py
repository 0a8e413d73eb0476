"""
Module: parsing.finalizer

Purpose:
    Turn a RawParsedQuestion into an immutable FinalizedQuestion: prune
    explanation fragments mistaken for options, classify MCQ vs short
    answer, resolve answer letters, infer the subject. Total: every raw
    question yields a valid FinalizedQuestion.

Key Functions:
    - finalize_question(): RawParsedQuestion -> FinalizedQuestion
    - resolve_letter_answer(): "A" + options -> option text
    - extract_answer_from_explanation(): Numeric answer from prose
    - infer_subject(): Lexical subject cues
    - prune_spurious_options(): Drop explanation fragments

Used By:
    - pipeline: parse_document()
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from quizdoc.common.thresholds import PARSING_THRESHOLDS, ParsingThresholds
from quizdoc.core.models.questions import (
    FinalizedQuestion,
    Level,
    QuestionType,
    RawParsedQuestion,
    Subject,
)

logger = logging.getLogger(__name__)

BARE_LETTER_RE = re.compile(r"^[A-Ea-e]$")

# Question wording of choice-style (reading/writing) items
CHOICE_CUE_RE = re.compile(
    r"Which choice|logical and precise word|completes the text|best describes|main purpose",
    re.IGNORECASE,
)

SPURIOUS_OPTION_RE = re.compile(
    r"^(?:(?:is|was)\s+(?:correct|incorrect|the\s+answer|right|wrong)\b|Choice\s+[A-E]\s+is\b)",
    re.IGNORECASE,
)

# Tried in order; group 1 is the answer
ANSWER_PATTERNS = (
    re.compile(r"(?:Therefore|Thus|Hence|So|Consequently)[^.]*?(?:is|=)\s*(-?\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"(?:answer|value|result|length|radius|coordinate)[^.]*?(?:is|=)\s*(-?\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"(\d+)\s*\.$"),
)

WRITING_CUES = ("standard english", "grammar", "punctuation")
READING_CUES = ("main purpose", "summarizes", "completes the text")


def prune_spurious_options(
    options: Sequence[str],
    thresholds: ParsingThresholds = PARSING_THRESHOLDS,
) -> List[str]:
    """
    Drop "options" that are really explanation text.

    Only applied when there are more options than a question normally has.
    """
    if len(options) <= thresholds.spurious_option_trigger:
        return list(options)
    kept = [
        option for option in options
        if not SPURIOUS_OPTION_RE.match(option) and len(option) <= thresholds.max_option_length
    ]
    if len(kept) != len(options):
        logger.debug(f"Pruned {len(options) - len(kept)} spurious options")
    return kept


def resolve_letter_answer(answer: str, options: Sequence[str]) -> str:
    """
    Map an answer letter to the text of the option it names.

    Args:
        answer: Answer token, e.g. "A".
        options: Option texts in letter order.

    Returns:
        Option text, or answer unchanged if it is not a bare letter or the
        letter has no (non-empty) option.

    Example:
        >>> resolve_letter_answer("A", ["5", "10"])
        '5'
    """
    if not BARE_LETTER_RE.match(answer):
        return answer
    index = ord(answer.upper()) - ord("A")
    if index < len(options) and options[index]:
        return options[index]
    return answer


def extract_answer_from_explanation(explanation: str) -> Optional[str]:
    """
    Find a numeric answer stated in an explanation.

    Example:
        >>> extract_answer_from_explanation("Subtract 3 from both sides. Therefore x is 4")
        '4'
    """
    if not explanation:
        return None
    for pattern in ANSWER_PATTERNS:
        match = pattern.search(explanation)
        if match and match.group(1):
            return match.group(1)
    return None


def infer_subject(question: str, explanation: str = "") -> Subject:
    """Guess the test section from wording in the question and explanation."""
    text = f"{question} {explanation}".lower()
    if any(cue in text for cue in WRITING_CUES):
        return Subject.WRITING
    if any(cue in text for cue in READING_CUES):
        return Subject.READING
    return Subject.MATH


def _short_answer(answer: str, options: Sequence[str], explanation: str) -> str:
    if options and BARE_LETTER_RE.match(answer):
        answer = resolve_letter_answer(answer, options)
    if BARE_LETTER_RE.match(answer) and explanation:
        extracted = extract_answer_from_explanation(explanation)
        if extracted:
            answer = extracted
    if len(options) == 1 and not answer:
        answer = options[0]
    return answer


def finalize_question(
    raw: RawParsedQuestion,
    default_level: Level = Level.MEDIUM,
    thresholds: ParsingThresholds = PARSING_THRESHOLDS,
) -> FinalizedQuestion:
    """
    Finalize a raw question.

    Questions with two or more options are MCQ. Everything else is short
    answer with options cleared; a short answer whose wording asks for a
    choice is flagged needs_review because its options were not found.

    Args:
        raw: Question accumulated by the parser.
        default_level: Level used when the question had no level tag.
        thresholds: Option pruning thresholds.

    Returns:
        FinalizedQuestion satisfying the MCQ/short-answer invariants.
    """
    question = raw.question_text.strip()
    explanation = (raw.explanation or "").strip()
    answer = raw.correct_answer_raw.strip()
    options = prune_spurious_options(raw.options, thresholds)
    needs_review = False

    if len(options) >= 2:
        question_type = QuestionType.MCQ
        if BARE_LETTER_RE.match(answer):
            answer = answer.upper()
    else:
        question_type = QuestionType.SHORT_ANSWER
        if CHOICE_CUE_RE.search(question):
            needs_review = True
            logger.debug(f"Choice-style question has {len(options)} options: {question[:60]!r}")
        answer = _short_answer(answer, options, explanation)
        options = []

    return FinalizedQuestion(
        question=question,
        topic=raw.topic,
        type=question_type,
        options=tuple(options),
        correct_answer=answer,
        explanation=explanation,
        level=raw.level_hint or default_level,
        subject=infer_subject(question, explanation),
        needs_review=needs_review,
    )
