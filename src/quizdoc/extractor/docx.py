"""
Module: extractor.docx

Purpose:
    Read a DOCX (OOXML ZIP container) into linear text. Paragraph text,
    equations, images and tables are emitted in document order; images are
    replaced by ``[IMAGE:<relId>.<ext>]`` placeholders and their bytes are
    returned alongside the text.

Key Functions:
    - extract_docx(): DOCX bytes -> (text, images)

Dependencies:
    - zipfile (std): Container access
    - lxml.etree: XML parsing
    - PIL.Image: Format sniffing for images stored without an extension
    - quizdoc.extractor.math: Equation conversion

Used By:
    - extractor.document: DOCX branch of the façade
"""

from __future__ import annotations

import hashlib
import html
import io
import logging
import posixpath
import re
import zipfile
import zlib
from typing import Dict, List, Optional, Tuple

from lxml import etree
from PIL import Image

from quizdoc.common.thresholds import MATH_THRESHOLDS
from quizdoc.core.models.images import ExtractedImage
from .config import ExtractionConfig
from .errors import InvalidContainerError, MalformedDocumentError
from .math.latex import convert
from .math.omml import build_math_node, flatten_math_text

logger = logging.getLogger(__name__)

DOCUMENT_PART = "word/document.xml"
RELS_PART = "word/_rels/document.xml.rels"

W = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
M = "{http://schemas.openxmlformats.org/officeDocument/2006/math}"
MC = "{http://schemas.openxmlformats.org/markup-compatibility/2006}"
R = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}"
A = "{http://schemas.openxmlformats.org/drawingml/2006/main}"
V = "{urn:schemas-microsoft-com:vml}"
O = "{urn:schemas-microsoft-com:office:office}"
REL = "{http://schemas.openxmlformats.org/package/2006/relationships}"

# Inline elements that never contribute visible text
_SKIPPED_TAGS = frozenset({
    W + "del",
    W + "delText",
    W + "instrText",
    W + "rPr",
    W + "pPr",
    W + "fldChar",
})
_DRAWING_TAGS = frozenset({W + "drawing", W + "pict", W + "object"})
_MATH_TAGS = frozenset({M + "oMath", M + "oMathPara"})

# (element, attributes holding the relationship id), in lookup order
_EMBED_LOOKUPS = (
    (A + "blip", (R + "embed",)),
    (V + "imagedata", (R + "id", O + "relid")),
    (V + "fill", (R + "id", O + "relid")),
)

_IMAGE_TARGET_RE = re.compile(r"(?:^|/)(?:media|embeddings)/")
_LEADING_PATH_RE = re.compile(r"^(?:\.\./|/)+")
_WHITESPACE_RE = re.compile(r"\s")
_LETTER_RE = re.compile(r"[^\W\d_]")

# Failures raised while decompressing a member that is listed in the archive
_MEMBER_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)


class _UnreadableMemberError(Exception):
    """A listed archive member whose bytes cannot be read back."""


def _read_member(archive: zipfile.ZipFile, part: str) -> bytes:
    """
    Read one archive member.

    Raises:
        KeyError: If the member does not exist.
        _UnreadableMemberError: If it exists but is corrupt, encrypted or
            uses an unsupported compression method.
    """
    try:
        return archive.read(part)
    except _MEMBER_READ_ERRORS as e:
        raise _UnreadableMemberError(f"{type(e).__name__}: {e}") from e


def _xml_parser() -> etree.XMLParser:
    # One parser per call; lxml parsers must not be shared between threads
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True, remove_comments=True)


def _parse_part(data: bytes, part: str):
    try:
        return etree.fromstring(data, parser=_xml_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(f"{part} is not well-formed XML: {e}") from e


def _load_relationships(archive: zipfile.ZipFile) -> Dict[str, str]:
    """
    Map relationship ids to image part names.

    Only media/ and embeddings/ targets are kept. A missing or broken
    relationships part yields an empty map; images then don't resolve.
    """
    try:
        data = _read_member(archive, RELS_PART)
    except KeyError:
        return {}
    except _UnreadableMemberError as e:
        logger.warning(f"Ignoring unreadable {RELS_PART}: {e}")
        return {}
    try:
        root = etree.fromstring(data, parser=_xml_parser())
    except etree.XMLSyntaxError as e:
        logger.warning(f"Ignoring unreadable {RELS_PART}: {e}")
        return {}

    relationships: Dict[str, str] = {}
    for rel in root.iter(REL + "Relationship"):
        rel_id = rel.get("Id")
        target = rel.get("Target")
        if not rel_id or not target or rel.get("TargetMode") == "External":
            continue
        if not _IMAGE_TARGET_RE.search(target):
            continue
        part = _LEADING_PATH_RE.sub("", target)
        if not part.startswith("word/"):
            part = "word/" + part
        relationships[rel_id] = part
    logger.debug(f"Loaded {len(relationships)} image relationships")
    return relationships


def _find_embed_id(element) -> Optional[str]:
    """Relationship id of the picture inside a drawing/pict/object element."""
    for tag, attributes in _EMBED_LOOKUPS:
        for found in element.iter(tag):
            for attribute in attributes:
                value = found.get(attribute)
                if value:
                    return value
    return None


def _sniff_extension(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as image:
            fmt = image.format
    except OSError:
        return "bin"
    return fmt.lower() if fmt else "bin"


def _looks_like_prose(flat: str) -> bool:
    """Text typed into the equation editor that should stay plain text."""
    if _WHITESPACE_RE.search(flat):
        return True
    letters = len(_LETTER_RE.findall(flat))
    has_operator = any(ch in MATH_THRESHOLDS.arithmetic_operators for ch in flat)
    return letters > MATH_THRESHOLDS.prose_letter_limit and not has_operator


class _InlineBuffer:
    """Collects paragraph text; equations and images get one space either side."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._space_pending = False

    def add_text(self, text: str) -> None:
        if not text:
            return
        if self._space_pending and not text[0].isspace():
            self._parts.append(" ")
        self._space_pending = False
        self._parts.append(text)

    def add_atom(self, atom: str) -> None:
        if not atom:
            return
        if self._parts and not self._parts[-1][-1:].isspace():
            self._parts.append(" ")
        self._parts.append(atom)
        self._space_pending = True

    def getvalue(self) -> str:
        return "".join(self._parts)


class _DocxWalker:
    """Walks w:body once, producing text blocks and recording images."""

    def __init__(self, archive: zipfile.ZipFile, relationships: Dict[str, str], config: ExtractionConfig):
        self._archive = archive
        self._relationships = relationships
        self._config = config
        self._images: Dict[str, ExtractedImage] = {}

    @property
    def images(self) -> List[ExtractedImage]:
        return list(self._images.values())

    def walk(self, body) -> List[str]:
        blocks: List[str] = []
        for child in body:
            blocks.extend(self._blocks(child))
        return [block for block in blocks if block.strip()]

    def _blocks(self, element) -> List[str]:
        if element.tag == W + "p":
            return [self.paragraph_text(element)]
        if element.tag == W + "tbl":
            return [self._table(element)]
        if element.tag == W + "sdt":
            content = element.find(W + "sdtContent")
            if content is None:
                return []
            blocks: List[str] = []
            for child in content:
                blocks.extend(self._blocks(child))
            return blocks
        return []

    def paragraph_text(self, paragraph) -> str:
        buffer = _InlineBuffer()
        self._walk_inline(paragraph, buffer)
        return buffer.getvalue().strip()

    def _walk_inline(self, element, buffer: _InlineBuffer) -> None:
        for child in element:
            tag = child.tag
            if not isinstance(tag, str) or tag in _SKIPPED_TAGS:
                continue
            if tag == W + "t":
                buffer.add_text(child.text or "")
            elif tag == W + "tab":
                buffer.add_text("\t")
            elif tag in (W + "br", W + "cr"):
                buffer.add_text("\n")
            elif tag in _MATH_TAGS:
                buffer.add_atom(self._math(child))
            elif tag in _DRAWING_TAGS:
                buffer.add_atom(self._image(child))
            elif tag == MC + "AlternateContent":
                # Choice and Fallback carry the same content twice
                branch = child.find(MC + "Choice")
                if branch is None:
                    branch = child.find(MC + "Fallback")
                if branch is not None:
                    self._walk_inline(branch, buffer)
            else:
                self._walk_inline(child, buffer)

    def _math(self, element) -> str:
        flat = flatten_math_text(element)
        if not self._config.math_as_latex or _looks_like_prose(flat):
            return flat.strip()
        return convert(build_math_node(element))

    def _image(self, element) -> str:
        if not self._config.extract_images:
            return ""
        rel_id = _find_embed_id(element)
        if not rel_id:
            return ""
        image = self._images.get(rel_id)
        if image is None:
            image = self._read_image(rel_id)
            if image is None:
                return ""
            self._images[rel_id] = image
        return image.placeholder

    def _read_image(self, rel_id: str) -> Optional[ExtractedImage]:
        part = self._relationships.get(rel_id)
        if part is None:
            logger.debug(f"Drawing {rel_id} has no image relationship")
            return None
        try:
            data = _read_member(self._archive, part)
        except (KeyError, _UnreadableMemberError) as e:
            logger.warning(f"Could not read image {rel_id} ({part}): {e}")
            return None

        extension = posixpath.splitext(part)[1].lstrip(".").lower() or _sniff_extension(data)
        digest = hashlib.sha1(data).hexdigest()[:12]
        logger.debug(f"Extracted image {rel_id} from {part}")
        return ExtractedImage(
            id=rel_id,
            extension=extension,
            data=data,
            suggested_name=f"image_{digest}_{rel_id}.{extension}",
        )

    def _cell_text(self, cell) -> str:
        texts = (self.paragraph_text(p) for p in cell.iter(W + "p"))
        return " ".join(text for text in texts if text)

    def _table(self, table) -> str:
        rows = [
            [self._cell_text(cell) for cell in row.findall(W + "tc")]
            for row in table.findall(W + "tr")
        ]
        if not self._config.table_as_html:
            return "\n".join(" | ".join(cells) for cells in rows if any(cells))

        parts = ['<table class="docx-table">']
        for cells in rows:
            parts.append("<tr>")
            parts.extend(f"<td>{html.escape(cell, quote=False)}</td>" for cell in cells)
            parts.append("</tr>")
        parts.append("</table>")
        return "".join(parts) if rows else ""


def extract_docx(
    data: bytes,
    config: Optional[ExtractionConfig] = None,
) -> Tuple[str, List[ExtractedImage]]:
    """
    Extract linear text and images from DOCX bytes.

    Non-empty blocks (paragraphs, tables) are joined by a blank line.

    Args:
        data: Raw .docx file contents.
        config: Optional extraction configuration.

    Returns:
        Tuple of (text, images). Each image is listed once, in order of
        first appearance, even when it is referenced several times.

    Raises:
        InvalidContainerError: If data is not a ZIP or has no word/document.xml.
        MalformedDocumentError: If the document XML is broken or has no body.

    Example:
        >>> text, images = extract_docx(Path("quiz.docx").read_bytes())
        >>> text.splitlines()[0]
        '1. Solve \\\\(\\\\frac{1}{2}\\\\) + x = 1'
    """
    config = config or ExtractionConfig()

    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise InvalidContainerError(f"Not a DOCX file (invalid ZIP container): {e}") from e

    with archive:
        try:
            document_xml = _read_member(archive, DOCUMENT_PART)
        except KeyError as e:
            raise InvalidContainerError(f"DOCX container has no {DOCUMENT_PART}") from e
        except _UnreadableMemberError as e:
            raise MalformedDocumentError(f"cannot read {DOCUMENT_PART} ({e})") from e

        root = _parse_part(document_xml, DOCUMENT_PART)
        if root.tag != W + "document":
            raise MalformedDocumentError(f"unexpected root element {root.tag!r}")
        body = root.find(W + "body")
        if body is None:
            raise MalformedDocumentError("document has no w:body")

        walker = _DocxWalker(archive, _load_relationships(archive), config)
        try:
            blocks = walker.walk(body)
        except RecursionError as e:
            raise MalformedDocumentError("document nesting is too deep") from e

    images = walker.images
    logger.info(f"Extracted {len(blocks)} blocks and {len(images)} images from DOCX")
    return "\n\n".join(blocks), images
