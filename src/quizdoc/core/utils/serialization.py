"""
Serialization Utilities

to/from JSON helpers for finalized questions and extracted images.

- ``serialize_question`` / ``deserialize_question`` wrap the model's
  ``to_dict`` / ``from_dict`` and stamp / check the schema version
- JSONL helpers read and write one question per line
- ``save_images`` writes extracted image bytes under their suggested names
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..models.images import ExtractedImage
from ..models.questions import FinalizedQuestion
from ..schemas.validator import QUESTION_SCHEMA_VERSION, ValidationError, validate_question

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_question(question: FinalizedQuestion) -> dict[str, Any]:
    """
    Serialize a FinalizedQuestion to a dictionary.

    Args:
        question: Question instance to serialize

    Returns:
        Dictionary suitable for JSON serialization, including schema_version
    """
    data = question.to_dict()
    data["schema_version"] = QUESTION_SCHEMA_VERSION
    return data


def deserialize_question(data: dict[str, Any], *, validate: bool = True) -> FinalizedQuestion:
    """
    Deserialize a FinalizedQuestion from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before construction

    Returns:
        FinalizedQuestion instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed
    """
    if validate:
        validate_question(data)
    return FinalizedQuestion.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# JSONL Utilities
# ─────────────────────────────────────────────────────────────────────────────

def load_questions_jsonl(path: Path, *, validate: bool = True) -> list[FinalizedQuestion]:
    """
    Load questions from a JSONL file.

    Args:
        path: Path to questions.jsonl file
        validate: Whether to validate each question

    Returns:
        List of FinalizedQuestion instances

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If any question is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Questions file not found: {path}")

    questions = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                data = json.loads(line)
                questions.append(deserialize_question(data, validate=validate))
            except (json.JSONDecodeError, ValidationError, ValueError, KeyError) as e:
                raise ValidationError(
                    f"Error parsing line {line_no}: {e}",
                    path=str(path),
                    errors=[str(e)]
                ) from e

    return questions


def save_questions_jsonl(questions: Iterable[FinalizedQuestion], path: Path) -> None:
    """
    Save questions to a JSONL file.

    Args:
        questions: Questions to save
        path: Output path for questions.jsonl
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for question in questions:
            f.write(json.dumps(serialize_question(question), ensure_ascii=False))
            f.write("\n")


def save_images(images: Iterable[ExtractedImage], output_dir: Path) -> dict[str, Path]:
    """
    Write extracted images to a directory.

    Args:
        images: Images returned by the extractor
        output_dir: Directory to write into (created if needed)

    Returns:
        Dict mapping relationship id -> written file path
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for image in images:
        target = output_dir / image.suggested_name
        target.write_bytes(image.data)
        written[image.id] = target
        logger.debug(f"Saved image {image.id} -> {target.name}")
    return written
