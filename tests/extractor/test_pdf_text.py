"""
Unit Tests for PDF Text Extraction

Tests for extract_pdf_text() using PDFs generated with PyMuPDF.
"""

import fitz
import pytest

from quizdoc.extractor.errors import PdfExtractionError
from quizdoc.extractor.utils.pdf import extract_pdf_text


class TestExtractPdfText:
    """Tests for extract_pdf_text function."""

    def test_extract_when_text_page_then_text_returned(self, make_pdf):
        """Text drawn on a page is returned."""
        text = extract_pdf_text(make_pdf(["1. What is 2 + 2?"]))

        assert "1. What is 2 + 2?" in text

    def test_extract_when_several_pages_then_document_order(self, make_pdf):
        """Pages are concatenated in order."""
        text = extract_pdf_text(make_pdf(["First page", "Second page"]))

        assert text.index("First page") < text.index("Second page")

    def test_extract_when_blank_page_between_then_skipped_silently(self, make_pdf):
        """A blank page does not fail a document that has text elsewhere."""
        text = extract_pdf_text(make_pdf(["Question", ""]))

        assert "Question" in text

    def test_extract_when_only_blank_pages_then_scanned_error(self, make_pdf):
        """A PDF without a text layer is reported as unsupported (no OCR)."""
        with pytest.raises(PdfExtractionError, match="no extractable text"):
            extract_pdf_text(make_pdf(["", ""]))

    def test_extract_when_encrypted_then_password_error(self, make_pdf):
        """A password-protected PDF is rejected."""
        data = make_pdf(
            ["Secret"],
            encryption=fitz.PDF_ENCRYPT_AES_256,
            user_pw="user",
            owner_pw="owner",
        )

        with pytest.raises(PdfExtractionError, match="password"):
            extract_pdf_text(data)

    def test_extract_when_not_pdf_then_parse_error(self):
        """Garbage bytes raise a typed error, not a PyMuPDF exception."""
        with pytest.raises(PdfExtractionError):
            extract_pdf_text(b"this is not a pdf document")
