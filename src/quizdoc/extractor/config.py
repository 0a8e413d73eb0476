"""
Module: extractor.config

Purpose:
    Configuration dataclass for document extraction and question parsing.
    Immutable so one instance can be shared across worker threads.

Key Classes:
    - ExtractionConfig: Settings for the whole pipeline

Used By:
    - extractor.docx: Math, image and table rendering switches
    - pipeline: Dedupe and level defaults
"""

from dataclasses import dataclass

from quizdoc.core.models.questions import Level


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for the document-to-question pipeline.

    Attributes:
        math_as_latex: Convert OOXML equations to LaTeX-like markup. When
            False, equations are emitted as their plain text (default True)
        extract_images: Collect images and emit [IMAGE:...] placeholders
            (default True)
        table_as_html: Render DOCX tables as an HTML <table> block; when
            False each row becomes a " | "-joined line (default True)
        drop_empty_questions: Drop questions with no text, options or answer during
            deduplication (default True)
        default_level: Level for questions without an [easy]/[hard] tag
    """
    math_as_latex: bool = True
    extract_images: bool = True
    table_as_html: bool = True
    drop_empty_questions: bool = True
    default_level: Level = Level.MEDIUM
