"""
Module: extractor.math.latex

Purpose:
    Render a MathNode tree as linear LaTeX-like markup that a browser
    math renderer (KaTeX/MathJax) can display inline.

Key Functions:
    - convert(): MathNode -> markup string (total, never raises)

Dependencies:
    - quizdoc.core.models.math_nodes
    - quizdoc.common.thresholds: Operator set for text detection

Used By:
    - extractor.docx: Equations inside paragraphs
"""

from __future__ import annotations

import re

from quizdoc.common.thresholds import MATH_THRESHOLDS
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

NARY_COMMANDS = {
    "∑": r"\sum",
    "∫": r"\int",
    "∬": r"\iint",
    "∭": r"\iiint",
    "∮": r"\oint",
    "∏": r"\prod",
    "∐": r"\coprod",
    "⋃": r"\bigcup",
    "⋂": r"\bigcap",
}

_LETTER_RE = re.compile(r"[^\W\d_]")
_WHITESPACE_RE = re.compile(r"\s")


def _looks_like_words(value: str) -> bool:
    """True when a text leaf is prose typed into the equation editor."""
    if _WHITESPACE_RE.search(value):
        return True
    if len(_LETTER_RE.findall(value)) < 2:
        return False
    if any(ch.isdigit() for ch in value):
        return False
    return not any(ch in MATH_THRESHOLDS.arithmetic_operators for ch in value)


def _text(value: str) -> str:
    if _looks_like_words(value):
        escaped = value.replace("{", r"\{").replace("}", r"\}")
        return rf"\text{{{escaped}}}"
    return value


def _join(children) -> str:
    return "".join(convert(child) for child in children)


def _nary(node: NAry) -> str:
    command = ""
    if node.operator:
        command = NARY_COMMANDS.get(node.operator, node.operator)
    limits = ""
    if node.sub is not None:
        limits += f"_{{{convert(node.sub)}}}"
    if node.sup is not None:
        limits += f"^{{{convert(node.sup)}}}"
    base = convert(node.base)
    # "\int" followed directly by "x" would read as "\intx"
    if command.startswith("\\") and not limits and base[:1].isalpha():
        command += " "
    return f"{command}{limits}{base}"


def convert(node: MathNode) -> str:
    """
    Convert a math tree to LaTeX-like markup.

    Args:
        node: Root of the tree (usually a Container).

    Returns:
        Markup string. Containers are wrapped in ``\\(`` ``\\)``.

    Example:
        >>> convert(Fraction(TextLeaf("1"), TextLeaf("2")))
        '\\\\frac{1}{2}'
    """
    if isinstance(node, Container):
        return rf"\({_join(node.children)}\)"
    if isinstance(node, Fraction):
        return rf"\frac{{{convert(node.num)}}}{{{convert(node.den)}}}"
    if isinstance(node, Radical):
        if node.degree is not None:
            return rf"\sqrt[{convert(node.degree)}]{{{convert(node.base)}}}"
        return rf"\sqrt{{{convert(node.base)}}}"
    if isinstance(node, Superscript):
        return f"{{{convert(node.base)}}}^{{{convert(node.exp)}}}"
    if isinstance(node, Subscript):
        return f"{{{convert(node.base)}}}_{{{convert(node.sub)}}}"
    if isinstance(node, SubSup):
        return f"{{{convert(node.base)}}}_{{{convert(node.sub)}}}^{{{convert(node.exp)}}}"
    if isinstance(node, Delimiter):
        return f"({convert(node.inner)})"
    if isinstance(node, NAry):
        return _nary(node)
    if isinstance(node, Run):
        for child in node.children:
            if isinstance(child, TextLeaf):
                return convert(child)
        return _join(node.children)
    if isinstance(node, TextLeaf):
        return _text(node.value)
    if isinstance(node, Unknown):
        return _join(node.children)
    return ""
