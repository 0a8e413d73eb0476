"""
Module: extractor.math.omml

Purpose:
    Convert OOXML math elements (lxml) into the immutable MathNode tree.
    Tag names are inspected here and only here; the LaTeX converter works
    on the typed tree.

Key Functions:
    - build_math_node(): lxml element -> MathNode
    - flatten_math_text(): Literal text of a math subtree

Dependencies:
    - lxml.etree: Element access and QName parsing
    - quizdoc.core.models.math_nodes

Used By:
    - extractor.docx: Equations inside paragraphs
"""

from __future__ import annotations

from typing import List, Optional

from lxml import etree

from quizdoc.core.models.math_nodes import (
    Container,
    Delimiter,
    Fraction,
    MathNode,
    NAry,
    Radical,
    Run,
    Subscript,
    SubSup,
    Superscript,
    TextLeaf,
    Unknown,
)

M_NS = "http://schemas.openxmlformats.org/officeDocument/2006/math"

# OOXML default when m:naryPr has no m:chr
DEFAULT_NARY_CHAR = "∫"


def _m(name: str) -> str:
    return f"{{{M_NS}}}{name}"


def _local_name(element) -> str:
    """Local tag name, or "" for comments and processing instructions."""
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def _is_property(element) -> bool:
    """Formatting elements (m:fPr, m:rPr, w:rPr, m:ctrlPr...) carry no content."""
    return _local_name(element).endswith("Pr")


def _child_nodes(element) -> List[MathNode]:
    return [
        build_math_node(child)
        for child in element
        if _local_name(child) and not _is_property(child)
    ]


def _group(element) -> MathNode:
    """Argument element (m:e, m:num, m:sup...) as a single node."""
    if element is None:
        return Unknown(())
    return Unknown(tuple(_child_nodes(element)))


def _optional_group(element) -> Optional[MathNode]:
    """Like _group, but None when the argument is missing or has no text."""
    if element is None or not flatten_math_text(element).strip():
        return None
    return _group(element)


def flatten_math_text(element) -> str:
    """
    Concatenate the literal text of a math subtree.

    Args:
        element: Any lxml element (typically m:oMath).

    Returns:
        Text of every m:t descendant in document order.
    """
    return "".join(t.text or "" for t in element.iter(_m("t")))


def build_math_node(element) -> MathNode:
    """
    Build a MathNode tree from an OOXML math element.

    Unrecognized elements become Unknown nodes so conversion can always
    fall back to rendering their children.

    Args:
        element: lxml element in the OOXML math namespace.

    Returns:
        Root MathNode for the element.

    Example:
        >>> node = build_math_node(etree.fromstring(
        ...     '<m:f xmlns:m="..."><m:num><m:r><m:t>1</m:t></m:r></m:num>'
        ...     '<m:den><m:r><m:t>2</m:t></m:r></m:den></m:f>'))
        >>> isinstance(node, Fraction)
        True
    """
    name = _local_name(element)

    if name == "oMath":
        return Container(tuple(_child_nodes(element)))

    if name == "oMathPara":
        children: List[MathNode] = []
        for child in element:
            if _local_name(child) == "oMath":
                children.extend(_child_nodes(child))
            elif _local_name(child) and not _is_property(child):
                children.append(build_math_node(child))
        return Container(tuple(children), display=True)

    if name == "f":
        return Fraction(num=_group(element.find(_m("num"))), den=_group(element.find(_m("den"))))

    if name == "rad":
        return Radical(
            base=_group(element.find(_m("e"))),
            degree=_optional_group(element.find(_m("deg"))),
        )

    if name == "sSup":
        return Superscript(base=_group(element.find(_m("e"))), exp=_group(element.find(_m("sup"))))

    if name == "sSub":
        return Subscript(base=_group(element.find(_m("e"))), sub=_group(element.find(_m("sub"))))

    if name == "sSubSup":
        return SubSup(
            base=_group(element.find(_m("e"))),
            sub=_group(element.find(_m("sub"))),
            exp=_group(element.find(_m("sup"))),
        )

    if name == "d":
        arguments = element.findall(_m("e"))
        if len(arguments) == 1:
            return Delimiter(inner=_group(arguments[0]))
        parts: List[MathNode] = []
        for index, argument in enumerate(arguments):
            if index:
                parts.append(TextLeaf(","))
            parts.append(_group(argument))
        return Delimiter(inner=Unknown(tuple(parts)))

    if name == "nary":
        operator = DEFAULT_NARY_CHAR
        char = element.find(f"{_m('naryPr')}/{_m('chr')}")
        if char is not None and char.get(_m("val")):
            operator = char.get(_m("val"))
        return NAry(
            base=_group(element.find(_m("e"))),
            sub=_optional_group(element.find(_m("sub"))),
            sup=_optional_group(element.find(_m("sup"))),
            operator=operator,
        )

    if name == "r":
        return Run(tuple(_child_nodes(element)))

    if name == "t":
        return TextLeaf(element.text or "")

    return Unknown(tuple(_child_nodes(element)))
