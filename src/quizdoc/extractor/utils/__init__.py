"""
Module: extractor.utils

Purpose:
    Format helpers for the non-DOCX inputs.

Key Modules:
    - pdf: PDF text extraction (PyMuPDF)
    - text: Text decoding and character normalisation
"""

from .pdf import extract_pdf_text
from .text import decode_text, normalise_text

__all__ = ["decode_text", "extract_pdf_text", "normalise_text"]
