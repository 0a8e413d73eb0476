"""
Schema Validation Utilities

Validates question dictionaries before they are turned back into
FinalizedQuestion objects (e.g. when a reviewer edits a JSONL export and
it is loaded again).

Checks are structural: required fields, enum values, and the
MCQ/short-answer option invariants. Fail fast on the first violation.
"""

from __future__ import annotations

from typing import Any


# Bumped whenever a field is added to FinalizedQuestion.to_dict()
QUESTION_SCHEMA_VERSION = 2  # v2 adds needs_review

_REQUIRED_FIELDS = ("question", "type", "options", "correct_answer")
_QUESTION_TYPES = ("mcq", "short_answer")
_LEVELS = ("Easy", "Medium", "Hard")
_SUBJECTS = ("math", "reading", "writing")


class ValidationError(Exception):
    """Raised when question data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_question(data: dict[str, Any]) -> None:
    """
    Validate a serialized question.

    Args:
        data: Question dictionary (FinalizedQuestion.to_dict() format).

    Raises:
        ValidationError: If data is invalid.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Question must be a dict, got {type(data).__name__}")

    missing = [f for f in _REQUIRED_FIELDS if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    if not isinstance(data["question"], str):
        raise ValidationError("question must be a string", path="question")

    qtype = data["type"]
    if qtype not in _QUESTION_TYPES:
        raise ValidationError(f"Invalid question type: {qtype!r}", path="type")

    options = data["options"]
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise ValidationError("options must be a list of strings", path="options")

    if qtype == "mcq" and len(options) < 2:
        raise ValidationError(
            f"MCQ question needs at least 2 options, got {len(options)}",
            path="options"
        )
    if qtype == "short_answer" and options:
        raise ValidationError(
            "Short-answer question cannot carry options",
            path="options"
        )

    level = data.get("level", "Medium")
    if level not in _LEVELS:
        raise ValidationError(f"Invalid level: {level!r}", path="level")

    subject = data.get("subject", "math")
    if subject not in _SUBJECTS:
        raise ValidationError(f"Invalid subject: {subject!r}", path="subject")

    version = data.get("schema_version", QUESTION_SCHEMA_VERSION)
    if version > QUESTION_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported question schema version: {version} (expected <= {QUESTION_SCHEMA_VERSION})",
            path="schema_version"
        )
