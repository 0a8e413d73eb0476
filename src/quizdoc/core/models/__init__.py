"""
Core Models Package

Data models shared by the extractor and parsing layers.

Math nodes, images and finalized questions are frozen dataclasses so they
can be handed across threads without copying. RawParsedQuestion is the
one mutable model: it only lives inside a single parser run.
"""

from .images import ExtractedImage
from .math_nodes import MathNode
from .questions import (
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
    "MathNode",
    "QuestionType",
    "RawParsedQuestion",
    "Subject",
]
