"""
Module: extractor.errors

Purpose:
    Typed failures of the extraction layer. Any of these is fatal for the
    document being processed; the parsing layer never raises.

Key Classes:
    - ExtractionError: Base class
    - UnsupportedTypeError, EmptyContentError, InvalidContainerError,
      MalformedDocumentError, PdfExtractionError
"""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Raised when a document's text cannot be extracted."""


class UnsupportedTypeError(ExtractionError):
    """Raised when the file extension is not docx, pdf or txt."""

    def __init__(self, extension: str):
        super().__init__(f"Unsupported file type: .{extension}. Please use .pdf, .docx, or .txt")
        self.extension = extension


class EmptyContentError(ExtractionError):
    """Raised when extraction succeeded but produced no usable text."""


class InvalidContainerError(ExtractionError):
    """Raised when a DOCX is not a ZIP archive or lacks word/document.xml."""


class MalformedDocumentError(ExtractionError):
    """Raised when the DOCX XML has an unexpected structure."""

    def __init__(self, detail: str):
        super().__init__(f"Malformed document: {detail}")
        self.detail = detail


class PdfExtractionError(ExtractionError):
    """Raised when PyMuPDF cannot produce text (encrypted, corrupt, scanned)."""
