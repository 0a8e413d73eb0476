"""
Module: math_nodes

Purpose:
    Immutable tree model for OOXML math expressions. Each variant is a
    frozen dataclass; the XML is converted into this model once
    (extractor.math.omml) and then rendered by pattern matching
    (extractor.math.latex).

Key Classes:
    - Container, Fraction, Radical, Superscript, Subscript, SubSup,
      Delimiter, NAry, Run, TextLeaf, Unknown
    - MathNode: Union of all variants

Dependencies:
    - dataclasses (std)

Used By:
    - extractor.math.omml: Builds the tree from lxml elements
    - extractor.math.latex: Converts the tree to LaTeX-like markup
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class TextLeaf:
    """Literal text inside an equation (OOXML ``m:t``)."""
    value: str


@dataclass(frozen=True)
class Run:
    """Math run (``m:r``). Children are usually a single TextLeaf."""
    children: Tuple["MathNode", ...] = ()


@dataclass(frozen=True)
class Container:
    """
    Equation wrapper (``m:oMath`` / ``m:oMathPara``).

    Attributes:
        children: Content of the equation in document order.
        display: True for block equations (``m:oMathPara``).
    """
    children: Tuple["MathNode", ...] = ()
    display: bool = False


@dataclass(frozen=True)
class Fraction:
    num: "MathNode"
    den: "MathNode"


@dataclass(frozen=True)
class Radical:
    base: "MathNode"
    degree: Optional["MathNode"] = None


@dataclass(frozen=True)
class Superscript:
    base: "MathNode"
    exp: "MathNode"


@dataclass(frozen=True)
class Subscript:
    base: "MathNode"
    sub: "MathNode"


@dataclass(frozen=True)
class SubSup:
    base: "MathNode"
    sub: "MathNode"
    exp: "MathNode"


@dataclass(frozen=True)
class Delimiter:
    """Bracketed expression (``m:d``). Always rendered with parentheses."""
    inner: "MathNode"


@dataclass(frozen=True)
class NAry:
    """
    N-ary operator such as a sum or integral (``m:nary``).

    Attributes:
        base: Operand expression.
        sub: Lower limit, if any.
        sup: Upper limit, if any.
        operator: Operator glyph from ``m:chr`` (e.g. "∑"), if known.
    """
    base: "MathNode"
    sub: Optional["MathNode"] = None
    sup: Optional["MathNode"] = None
    operator: Optional[str] = None


@dataclass(frozen=True)
class Unknown:
    """Any element without dedicated handling; rendered as its children."""
    children: Tuple["MathNode", ...] = ()


MathNode = Union[
    Container,
    Fraction,
    Radical,
    Superscript,
    Subscript,
    SubSup,
    Delimiter,
    NAry,
    Run,
    TextLeaf,
    Unknown,
]
