"""
Schemas Package

Validation utilities for serialized question records.
"""

from .validator import (
    validate_question,
    ValidationError,
    QUESTION_SCHEMA_VERSION,
)

__all__ = [
    "validate_question",
    "ValidationError",
    "QUESTION_SCHEMA_VERSION",
]
