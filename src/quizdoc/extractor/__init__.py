"""
Module: extractor

Purpose:
    Format-specific text extraction. Everything in this package may raise
    an ExtractionError subclass; nothing downstream does.

Key Modules:
    - document: extract_document() façade
    - docx: DOCX container walker
    - math: OOXML equations -> LaTeX-like markup
    - utils: PDF and plain-text helpers
    - config: ExtractionConfig
    - errors: ExtractionError hierarchy
"""

from .config import ExtractionConfig
from .document import ExtractedDocument, extract_document
from .errors import (
    EmptyContentError,
    ExtractionError,
    InvalidContainerError,
    MalformedDocumentError,
    PdfExtractionError,
    UnsupportedTypeError,
)

__all__ = [
    "EmptyContentError",
    "ExtractedDocument",
    "ExtractionConfig",
    "ExtractionError",
    "InvalidContainerError",
    "MalformedDocumentError",
    "PdfExtractionError",
    "UnsupportedTypeError",
    "extract_document",
]
