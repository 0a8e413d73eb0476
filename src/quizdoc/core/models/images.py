"""
Module: images

Purpose:
    Provides the ExtractedImage dataclass - an image recovered from a
    DOCX container, keyed by its OOXML relationship id. The same id is
    used in the ``[IMAGE:<id>.<ext>]`` placeholder written into the
    extracted text.

Dependencies:
    - dataclasses (std)

Used By:
    - extractor.docx: Produces images during container extraction
    - core.utils.serialization: Writes images to disk
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedImage:
    """
    Image bytes pulled out of a document.

    Attributes:
        id: OOXML relationship id (e.g. "rId7").
        extension: File extension without the dot (e.g. "png").
        data: Raw image bytes.
        suggested_name: Collision-resistant file name for storage.

    Example:
        >>> img = ExtractedImage("rId7", "png", b"...", "image_ab12_rId7.png")
        >>> img.placeholder
        '[IMAGE:rId7.png]'
    """
    id: str
    extension: str
    data: bytes
    suggested_name: str

    @property
    def placeholder(self) -> str:
        """Placeholder token emitted inline wherever this image appears."""
        return f"[IMAGE:{self.id}.{self.extension}]"

    @property
    def content_type(self) -> str:
        ext = "jpeg" if self.extension == "jpg" else self.extension
        return f"image/{ext}"
