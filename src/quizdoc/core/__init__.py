"""
quizdoc Core Package

Shared data models, schema checks and serialization helpers. Nothing in
this package performs document I/O.
"""

from .models import (
    ExtractedImage,
    FinalizedQuestion,
    Level,
    QuestionType,
    RawParsedQuestion,
    Subject,
)

__all__ = [
    "ExtractedImage",
    "FinalizedQuestion",
    "Level",
    "QuestionType",
    "RawParsedQuestion",
    "Subject",
]
