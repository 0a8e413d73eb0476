import io
import sys
import zipfile
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import fitz
import pytest
from PIL import Image

# Add src to sys.path so we can import quizdoc
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


NAMESPACES = (
    'xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main" '
    'xmlns:m="http://schemas.openxmlformats.org/officeDocument/2006/math" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:wp="http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing" '
    'xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006" '
    'xmlns:v="urn:schemas-microsoft-com:vml" '
    'xmlns:o="urn:schemas-microsoft-com:office:office"'
)

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Default Extension="png" ContentType="image/png"/>'
    '</Types>'
)

IMAGE_REL_TYPE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"


def build_docx(
    body: str,
    *,
    relationships: Optional[Dict[str, str]] = None,
    parts: Optional[Dict[str, bytes]] = None,
    document_xml: Optional[str] = None,
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """
    Build an in-memory DOCX.

    Args:
        body: XML placed inside w:body.
        relationships: rel id -> Target for word/_rels/document.xml.rels.
        parts: Extra archive members (e.g. "word/media/image1.png").
        document_xml: Full replacement for word/document.xml.
        compression: zipfile compression method for every member.
    """
    if document_xml is None:
        document_xml = (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            "<w:document " + NAMESPACES + "><w:body>" + body + "</w:body></w:document>"
        )
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression) as archive:
        archive.writestr("[Content_Types].xml", CONTENT_TYPES)
        archive.writestr("word/document.xml", document_xml)
        if relationships is not None:
            rels = "".join(
                f'<Relationship Id="{rel_id}" Type="{IMAGE_REL_TYPE}" Target="{target}"/>'
                for rel_id, target in relationships.items()
            )
            archive.writestr(
                "word/_rels/document.xml.rels",
                '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
                '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
                + rels + "</Relationships>",
            )
        for name, data in (parts or {}).items():
            archive.writestr(name, data)
    return buffer.getvalue()


def corrupt_zip_member(data: bytes, name: str, mutate: Callable[[bytes], bytes]) -> bytes:
    """
    Rewrite the stored bytes of one archive member, leaving its CRC alone.

    Args:
        data: ZIP archive bytes (members written without extra fields).
        name: Member to damage.
        mutate: Maps the member's stored bytes to same-length replacement bytes.
    """
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        info = archive.getinfo(name)
    start = info.header_offset + 30 + len(info.filename.encode("utf-8")) + len(info.extra)
    end = start + info.compress_size
    damaged = mutate(data[start:end])
    assert len(damaged) == end - start
    return data[:start] + damaged + data[end:]


def build_pdf(pages: Iterable[str], **save_options) -> bytes:
    """Build a PDF with one page per string (empty string = blank page)."""
    doc = fitz.open()
    try:
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text, fontsize=11)
        return doc.tobytes(**save_options)
    finally:
        doc.close()


# Common test fixtures
@pytest.fixture
def make_docx():
    """Return the DOCX builder."""
    return build_docx


@pytest.fixture
def make_pdf():
    """Return the PDF builder."""
    return build_pdf


@pytest.fixture
def png_bytes() -> bytes:
    """Small PNG image."""
    img = Image.new("RGB", (20, 10), color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def corrupt_member():
    """Return the archive member corrupter."""
    return corrupt_zip_member
