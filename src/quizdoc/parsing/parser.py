"""
Module: parsing.parser

Purpose:
    Line-oriented state machine that segments extracted document text into
    raw questions. Each line is classified in priority order: question
    start, answer key, explanation, options, continuation. The parser never
    raises; a line that fits nothing else is a continuation.

Key Functions:
    - parse_questions(): text -> List[RawParsedQuestion]

Key Classes:
    - QuestionBlockParser: Parser bound to a topic taxonomy
    - ParserState: Phase of the question being collected

Dependencies:
    - quizdoc.common.topics: Topic detection
    - quizdoc.parsing.options: Option-letter extraction

Used By:
    - pipeline: parse_document()
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List, Optional, Tuple

from quizdoc.common.thresholds import PARSING_THRESHOLDS, ParsingThresholds
from quizdoc.common.topics import DEFAULT_TAXONOMY, TopicTaxonomy
from quizdoc.core.models.questions import Level, RawParsedQuestion
from quizdoc.extractor.utils.text import normalise_text
from .options import extract_options

logger = logging.getLogger(__name__)


class ParserState(Enum):
    """Phase of the question currently being collected."""
    AWAITING_BODY = "awaiting_body"
    COLLECTING_OPTIONS = "collecting_options"
    ANSWER_RECORDED = "answer_recorded"
    COLLECTING_EXPLANATION = "collecting_explanation"


# "1." / "2)" (not "2.5"), "Q1", "Q.1)", "Question 3:"
QUESTION_NUMBER_RE = re.compile(
    r"^(?:\d+[.)](?!\d)|Q\.?\d+[:.)]?|Question\s*\d+[:.)]?)\s*",
    re.IGNORECASE,
)
TOPIC_PREFIX_RE = re.compile(r"^Topic\s*:\s*", re.IGNORECASE)
ANSWER_RE = re.compile(
    r"^(?:Correct\s+Answer|Correct\s+Option|Correct|Answer|Ans)\b[\s:.\-]*(.*)$",
    re.IGNORECASE,
)
ANSWER_LETTER_RE = re.compile(r"^([A-Ea-e])(?:\)|\.|:|-|\s)\s*(.*)$")
BARE_LETTER_RE = re.compile(r"^[A-Ea-e]$")
EXPLANATION_RE = re.compile(
    r"^(?:Explanation|Solution|Sol|Reason|Note|Hint)\b[\s:.\-]*(.*)$",
    re.IGNORECASE,
)
CHOICE_SENTENCE_RE = re.compile(r"^Choice\s+[A-E]\s+is\s+(?:in)?correct\b", re.IGNORECASE)
PASSAGE_RE = re.compile(r"^Passage\s*/\s*Sentence\s*:\s*", re.IGNORECASE)
OPTIONS_HEADER_RE = re.compile(r"^Options\s*:\s*", re.IGNORECASE)

LEVEL_TOKENS = (
    ("[easy]", Level.EASY),
    ("[medium]", Level.MEDIUM),
    ("[hard]", Level.HARD),
)
_LEVEL_TOKEN_RE = re.compile(r"\[(?:easy|medium|hard)\]", re.IGNORECASE)

GENERIC_EXPLANATION_RES = (
    re.compile(
        r"^Choice\s+[A-E]\s+is\s+(?:incorrect|correct)\s+"
        r"(?:and\s+may\s+result\s+from|This\s+is\s+the\s+value\s+of)",
        re.IGNORECASE,
    ),
    re.compile(r"^Choice\s+[A-E]\s+is\s+incorrect\.?$", re.IGNORECASE),
)
_CORRECTNESS_RE = re.compile(r"incorrect|correct", re.IGNORECASE)
_CAUSAL_RE = re.compile(r"because|since|as|therefore|thus", re.IGNORECASE)

# Spans a topic colon is never searched in: placeholders and inline math
_PROTECTED_SPAN_RE = re.compile(r"\[IMAGE:[^\]]*\]|\\\(.*?\\\)")


def is_generic_explanation(text: str, thresholds: ParsingThresholds = PARSING_THRESHOLDS) -> bool:
    """
    Check for boilerplate such as "Choice B is incorrect." that carries
    no reasoning.
    """
    if any(pattern.search(text) for pattern in GENERIC_EXPLANATION_RES):
        return True
    return (
        len(text) < thresholds.generic_explanation_max_length
        and bool(_CORRECTNESS_RE.search(text))
        and not _CAUSAL_RE.search(text)
    )


def _level_hint(line: str) -> Optional[Level]:
    lowered = line.lower()
    hint = None
    for token, level in LEVEL_TOKENS:
        if token in lowered:
            hint = level
    return hint


def _strip_level_tokens(text: str) -> str:
    return _LEVEL_TOKEN_RE.sub("", text).strip()


def _topic_colon(text: str) -> Optional[int]:
    """
    Index of the first colon that can separate a topic from the question.

    Colons inside image placeholders or inline math, between digits
    (ratios, times) or in "://" are not separators.
    """
    protected = [m.span() for m in _PROTECTED_SPAN_RE.finditer(text)]
    for match in re.finditer(":", text):
        index = match.start()
        if any(start <= index < end for start, end in protected):
            continue
        before = text[index - 1] if index else ""
        after = text[index + 1] if index + 1 < len(text) else ""
        if before.isdigit() and after.isdigit():
            continue
        if text.startswith("//", index + 1):
            continue
        return index
    return None


class QuestionBlockParser:
    """
    Segments text into RawParsedQuestion records.

    Holds only read-only configuration; every parse() call keeps its own
    state, so one parser can serve concurrent callers.

    Example:
        >>> parser = QuestionBlockParser()
        >>> [q.options for q in parser.parse("1. 2+2?\\nA) 3 B) 4\\nAnswer: B")]
        [['3', '4']]
    """

    def __init__(
        self,
        taxonomy: TopicTaxonomy = DEFAULT_TAXONOMY,
        thresholds: ParsingThresholds = PARSING_THRESHOLDS,
    ):
        self.taxonomy = taxonomy
        self.thresholds = thresholds

    # ─────────────────────────────────────────────────────────────────────
    # Topic extraction
    # ─────────────────────────────────────────────────────────────────────

    def split_topic(self, text: str) -> Tuple[Optional[str], str]:
        """
        Split a question-start remainder into (topic, question text).

        A colon separates a topic from the question; the text before it is
        trusted as the topic even when it is not a known label. When that
        text merely begins with a known label, the labels are stripped as
        a prefix instead and the colon stays in the question.
        """
        colon = _topic_colon(text)
        if colon is not None:
            candidate = text[:colon].strip()
            question = text[colon + 1:].strip()
            label = self.taxonomy.canonical(candidate)
            if label is not None:
                return label, question
            if candidate and self.taxonomy.match_prefix(candidate) is None:
                return candidate, question
        return self.taxonomy.split_topic(text)

    # ─────────────────────────────────────────────────────────────────────
    # Line handlers
    # ─────────────────────────────────────────────────────────────────────

    def _match_question_start(self, line: str) -> Optional[Tuple[str, bool]]:
        """Return (remainder, explicit_topic) if the line starts a question."""
        number = QUESTION_NUMBER_RE.match(line)
        if number:
            remainder = line[number.end():]
            topic = TOPIC_PREFIX_RE.match(remainder)
            if topic:
                return remainder[topic.end():], True
            return remainder, False
        topic = TOPIC_PREFIX_RE.match(line)
        if topic:
            return line[topic.end():], True
        if self.taxonomy.starts_with_topic(line):
            return line, False
        return None

    def _start_question(self, line: str, remainder: str, explicit_topic: bool) -> Tuple[RawParsedQuestion, ParserState]:
        question = RawParsedQuestion(level_hint=_level_hint(line))
        state = ParserState.AWAITING_BODY

        text = _strip_level_tokens(remainder)
        residual, options = extract_options(text, 0, self.thresholds)
        if options:
            question.options.extend(options)
            state = ParserState.COLLECTING_OPTIONS

        topic, body = self.split_topic(residual)
        if topic is None and explicit_topic:
            topic, body = residual or None, ""
        question.topic = topic
        question.append_question_text(body)
        logger.debug(f"Question start: topic={topic!r}, {len(options)} inline options")
        return question, state

    def _record_answer(self, question: RawParsedQuestion, content: str, state: ParserState) -> ParserState:
        content = content.strip()
        split = ANSWER_LETTER_RE.match(content)
        if split:
            question.correct_answer_raw = split.group(1).upper()
            trailing = split.group(2).strip()
            if trailing and question.explanation is None:
                question.explanation = trailing
        elif BARE_LETTER_RE.match(content):
            question.correct_answer_raw = content.upper()
        else:
            question.correct_answer_raw = content

        if state is ParserState.COLLECTING_EXPLANATION or question.explanation is not None:
            return ParserState.COLLECTING_EXPLANATION
        return ParserState.ANSWER_RECORDED

    def _record_explanation(self, question: RawParsedQuestion, text: str, state: ParserState) -> ParserState:
        text = text.strip()
        if question.explanation is None and is_generic_explanation(text, self.thresholds):
            # Skipped boilerplate leaves the block where it was
            logger.debug(f"Skipping generic explanation: {text!r}")
            return state
        question.append_explanation(text)
        return ParserState.COLLECTING_EXPLANATION

    def _record_options(self, question: RawParsedQuestion, line: str, state: ParserState) -> Optional[ParserState]:
        first = not question.options
        residual, options = extract_options(line, len(question.options), self.thresholds)
        if not options:
            return None
        if residual:
            if first:
                question.append_question_text(residual)
            else:
                question.append_to_last_option(residual)
        question.options.extend(options)
        if state in (ParserState.AWAITING_BODY, ParserState.COLLECTING_OPTIONS):
            return ParserState.COLLECTING_OPTIONS
        return state

    def _continue(self, question: RawParsedQuestion, line: str, state: ParserState) -> ParserState:
        if state is ParserState.COLLECTING_EXPLANATION:
            question.append_explanation(line)
        elif state is ParserState.AWAITING_BODY:
            question.append_question_text(line)
        elif question.options:
            question.append_to_last_option(line)
        else:
            # Answer key given for a question without options
            question.append_explanation(line)
            return ParserState.COLLECTING_EXPLANATION
        return state

    # ─────────────────────────────────────────────────────────────────────
    # Main loop
    # ─────────────────────────────────────────────────────────────────────

    def parse(self, text: str) -> List[RawParsedQuestion]:
        """
        Parse text into raw questions.

        Args:
            text: Extracted document text.

        Returns:
            Raw questions in document order (possibly empty).
        """
        lines = [line.strip() for line in normalise_text(text).splitlines()]
        lines = [line for line in lines if line]

        questions: List[RawParsedQuestion] = []
        current: Optional[RawParsedQuestion] = None
        state = ParserState.AWAITING_BODY
        skipped = 0

        for line in lines:
            start = self._match_question_start(line)
            if start is not None:
                if current is not None:
                    questions.append(current)
                current, state = self._start_question(line, *start)
                continue

            if current is None:
                skipped += 1
                continue

            passage = PASSAGE_RE.match(line)
            if passage:
                current.append_question_text(line[passage.end():], separator="\n\n")
                continue

            header = OPTIONS_HEADER_RE.match(line)
            if header:
                line = line[header.end():]
                if not line:
                    continue

            answer = ANSWER_RE.match(line)
            if answer:
                state = self._record_answer(current, answer.group(1), state)
                continue

            explanation = EXPLANATION_RE.match(line)
            if explanation:
                state = self._record_explanation(current, explanation.group(1), state)
                continue
            if CHOICE_SENTENCE_RE.match(line):
                state = self._record_explanation(current, line, state)
                continue

            new_state = self._record_options(current, line, state)
            if new_state is not None:
                state = new_state
                continue

            state = self._continue(current, line, state)

        if current is not None:
            questions.append(current)

        if skipped:
            logger.debug(f"Ignored {skipped} lines before the first question")
        logger.info(f"Parsed {len(questions)} questions from {len(lines)} lines")
        return questions


def parse_questions(text: str, taxonomy: TopicTaxonomy = DEFAULT_TAXONOMY) -> List[RawParsedQuestion]:
    """
    Parse extracted text into raw questions.

    Args:
        text: Document text from extract_document().
        taxonomy: Topic labels for question-start and topic detection.

    Returns:
        List of RawParsedQuestion in document order.
    """
    return QuestionBlockParser(taxonomy).parse(text)
