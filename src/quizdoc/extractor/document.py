"""
Module: extractor.document

Purpose:
    Single entry point for turning an uploaded file into text. Dispatches
    on the file extension to the DOCX, PDF or plain-text extractor.

Key Functions:
    - extract_document(): (filename, bytes) -> ExtractedDocument

Key Classes:
    - ExtractedDocument: Text plus any images found

Used By:
    - pipeline: parse_document(), extract_raw_text()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Optional

from quizdoc.core.models.images import ExtractedImage
from .config import ExtractionConfig
from .docx import extract_docx
from .errors import EmptyContentError, UnsupportedTypeError
from .utils.pdf import extract_pdf_text
from .utils.text import decode_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("docx", "pdf", "txt")


@dataclass(frozen=True)
class ExtractedDocument:
    """
    Linear text of a document.

    Attributes:
        text: Extracted text; DOCX images appear as placeholders.
        images: Images referenced by the placeholders (DOCX only).
    """
    text: str
    images: List[ExtractedImage] = field(default_factory=list)


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot ("" if none)."""
    return PurePath(filename).suffix.lstrip(".").lower()


def extract_document(
    filename: str,
    data: bytes,
    config: Optional[ExtractionConfig] = None,
) -> ExtractedDocument:
    """
    Extract text (and DOCX images) from an uploaded file.

    Args:
        filename: Original file name; only its extension is used.
        data: File contents.
        config: Optional extraction configuration.

    Returns:
        ExtractedDocument with non-empty text.

    Raises:
        UnsupportedTypeError: If the extension is not docx, pdf or txt.
        EmptyContentError: If no text could be extracted.
        InvalidContainerError, MalformedDocumentError: DOCX failures.
        PdfExtractionError: PDF failures.
    """
    config = config or ExtractionConfig()
    extension = file_extension(filename)

    images: List[ExtractedImage] = []
    if extension == "docx":
        text, images = extract_docx(data, config)
    elif extension == "pdf":
        text = extract_pdf_text(data)
    elif extension == "txt":
        text = decode_text(data)
    else:
        raise UnsupportedTypeError(extension)

    if not text.strip():
        raise EmptyContentError(f"No text content extracted from {filename}")

    logger.info(f"Extracted {len(text)} characters and {len(images)} images from {filename}")
    return ExtractedDocument(text=text, images=images)
