"""
Module: extractor.math

Purpose:
    OOXML equation support: build_math_node() turns lxml elements into the
    MathNode tree, convert() renders that tree as LaTeX-like markup.
"""

from .latex import convert
from .omml import build_math_node, flatten_math_text

__all__ = ["build_math_node", "convert", "flatten_math_text"]
