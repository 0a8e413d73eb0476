"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_question,
    deserialize_question,
    load_questions_jsonl,
    save_questions_jsonl,
    save_images,
)

__all__ = [
    "serialize_question",
    "deserialize_question",
    "load_questions_jsonl",
    "save_questions_jsonl",
    "save_images",
]
