"""
Module: extractor.utils.pdf

Purpose:
    Plain text extraction from PDF bytes using PyMuPDF. Layout is not
    preserved beyond the line breaks PyMuPDF reports.

Key Functions:
    - extract_pdf_text(): PDF bytes -> text

Dependencies:
    - fitz (PyMuPDF): PDF access

Used By:
    - extractor.document: PDF branch of the façade
"""

from __future__ import annotations

import logging
from typing import List

import fitz

from ..errors import PdfExtractionError

logger = logging.getLogger(__name__)


def _page_text(page: fitz.Page) -> str:
    try:
        return page.get_text("text") or ""
    except (RuntimeError, ValueError) as e:
        logger.warning(f"Failed to extract text from page {page.number + 1}: {e}")
        return ""


def extract_pdf_text(data: bytes) -> str:
    """
    Extract the text of every page of a PDF.

    Args:
        data: Raw PDF file contents.

    Returns:
        Page texts joined by newlines.

    Raises:
        PdfExtractionError: If the PDF cannot be opened, is password
            protected, or contains no extractable text (e.g. scanned pages).

    Example:
        >>> text = extract_pdf_text(Path("worksheet.pdf").read_bytes())
        >>> text.splitlines()[0]
        '1. What is 2 + 2?'
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise PdfExtractionError(f"Failed to parse PDF: {e}") from e

    with doc:
        if doc.needs_pass:
            raise PdfExtractionError("PDF is password protected")
        pages: List[str] = [_page_text(page) for page in doc]

    text = "\n".join(pages)
    if not text.strip():
        raise PdfExtractionError(
            "PDF contains no extractable text. It may be a scanned image; OCR is not supported"
        )
    logger.info(f"Extracted text from {len(pages)} PDF pages")
    return text
