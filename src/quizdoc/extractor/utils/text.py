"""
Module: extractor.utils.text

Purpose:
    Plain-text helpers: byte decoding for .txt uploads and character
    normalisation applied before line parsing.

Key Functions:
    - decode_text(): Bytes -> str (UTF-8, BOM tolerant)
    - normalise_text(): Fold dash and division glyphs to ASCII

Used By:
    - extractor.document: TXT branch of the façade
    - parsing.parser: Pre-processing
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# En dash, em dash and minus sign all read as "-"; division sign as "/"
_CHARACTER_MAP = str.maketrans({
    "–": "-",
    "—": "-",
    "−": "-",
    "÷": "/",
})


def decode_text(data: bytes) -> str:
    """
    Decode uploaded text bytes.

    A UTF-8 byte order mark is dropped. Invalid byte sequences are
    replaced with U+FFFD rather than failing the whole document.

    Args:
        data: Raw file contents.

    Returns:
        Decoded text.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Text is not valid UTF-8 ({e.reason} at byte {e.start}); replacing invalid bytes")
        return data.decode("utf-8-sig", errors="replace")


def normalise_text(text: str) -> str:
    """Replace typographic dashes and the division sign with ASCII."""
    return text.translate(_CHARACTER_MAP)
