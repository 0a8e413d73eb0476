"""
Module: parsing

Purpose:
    Text -> questions. The parser segments text into raw questions, the
    finalizer turns each into a FinalizedQuestion and the deduplicator
    removes repeats. Nothing in this package raises on bad input.
"""

from .dedupe import dedupe_questions
from .finalizer import finalize_question, resolve_letter_answer
from .options import extract_options
from .parser import ParserState, QuestionBlockParser, parse_questions

__all__ = [
    "ParserState",
    "QuestionBlockParser",
    "dedupe_questions",
    "extract_options",
    "finalize_question",
    "parse_questions",
    "resolve_letter_answer",
]
