"""
Module: questions

Purpose:
    Question records produced by the parsing layer. RawParsedQuestion is
    the mutable accumulator filled line by line by the parser;
    FinalizedQuestion is the immutable, validated result handed to
    callers.

Key Classes:
    - Level, QuestionType, Subject: String enums used in records
    - RawParsedQuestion: Mutable accumulator during parsing
    - FinalizedQuestion: Immutable gradeable question

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - parsing.parser: Creates and mutates RawParsedQuestion
    - parsing.finalizer: Converts RawParsedQuestion -> FinalizedQuestion
    - parsing.dedupe, pipeline, core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


class Level(str, Enum):
    """Difficulty level."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    def __str__(self) -> str:
        return self.value


class QuestionType(str, Enum):
    """Gradeable question form."""
    MCQ = "mcq"
    SHORT_ANSWER = "short_answer"

    def __str__(self) -> str:
        return self.value


class Subject(str, Enum):
    """Test section a question belongs to."""
    MATH = "math"
    READING = "reading"
    WRITING = "writing"

    def __str__(self) -> str:
        return self.value


@dataclass
class RawParsedQuestion:
    """
    Question under construction.

    Created when the parser sees a question-start line and mutated by
    every following line until the next question starts.

    Attributes:
        question_text: Accumulated question stem.
        topic: Detected topic label ("Main" or "Main - Sub").
        options: Option texts in letter order (A, B, C...).
        correct_answer_raw: Answer token as written (letter or value).
        explanation: Accumulated explanation, None until one is seen.
        level_hint: Level from an inline ``[easy]``/``[hard]`` tag.
    """
    question_text: str = ""
    topic: Optional[str] = None
    options: List[str] = field(default_factory=list)
    correct_answer_raw: str = ""
    explanation: Optional[str] = None
    level_hint: Optional[Level] = None

    def append_question_text(self, text: str, separator: str = " ") -> None:
        text = text.strip()
        if not text:
            return
        self.question_text = f"{self.question_text}{separator}{text}" if self.question_text else text

    def append_explanation(self, text: str) -> None:
        text = text.strip()
        if not text:
            return
        self.explanation = f"{self.explanation} {text}" if self.explanation else text

    def append_to_last_option(self, text: str) -> None:
        text = text.strip()
        if not text or not self.options:
            return
        last = self.options[-1]
        self.options[-1] = f"{last} {text}" if last else text


@dataclass(frozen=True)
class FinalizedQuestion:
    """
    Gradeable question (immutable).

    Attributes:
        question: Question stem, may contain ``\\(...\\)`` math and
            ``[IMAGE:<id>.<ext>]`` placeholders.
        topic: Topic label or None.
        type: MCQ or SHORT_ANSWER.
        options: Option texts; empty for short-answer questions.
        correct_answer: Letter A-E or literal value.
        explanation: Explanation text ("" when none was found).
        level: Difficulty level.
        subject: Inferred test section.
        needs_review: True when the heuristics could not settle the
            question form and a human should check it.

    Invariants:
        - MCQ questions have at least two options
        - SHORT_ANSWER questions have no options

    Example:
        >>> q = FinalizedQuestion("2 + 2 = ?", None, QuestionType.SHORT_ANSWER,
        ...                       (), "4", "", Level.EASY, Subject.MATH)
        >>> q.is_mcq
        False
    """
    question: str
    topic: Optional[str]
    type: QuestionType
    options: Tuple[str, ...]
    correct_answer: str
    explanation: str
    level: Level
    subject: Subject
    needs_review: bool = False

    def __post_init__(self) -> None:
        """Validate question form invariants."""
        if self.type is QuestionType.MCQ and len(self.options) < 2:
            raise ValueError(f"MCQ question needs at least 2 options, got {len(self.options)}")
        if self.type is QuestionType.SHORT_ANSWER and self.options:
            raise ValueError("Short-answer question cannot carry options")

    @property
    def is_mcq(self) -> bool:
        return self.type is QuestionType.MCQ

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "question": self.question,
            "topic": self.topic,
            "type": self.type.value,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
            "level": self.level.value,
            "subject": self.subject.value,
            "needs_review": self.needs_review,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FinalizedQuestion:
        """Create from a dictionary produced by to_dict()."""
        return cls(
            question=data["question"],
            topic=data.get("topic"),
            type=QuestionType(data["type"]),
            options=tuple(data.get("options", [])),
            correct_answer=data.get("correct_answer", ""),
            explanation=data.get("explanation", ""),
            level=Level(data.get("level", Level.MEDIUM.value)),
            subject=Subject(data.get("subject", Subject.MATH.value)),
            needs_review=data.get("needs_review", False),
        )
