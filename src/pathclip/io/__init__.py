"""SVG I/O layer for pathclip.

This module reads paths out of SVG documents and writes results back,
using the fontTools SVG path parser and pens. It is the collaborator that
resolves element transforms and rejects graphic features the geometry
pipeline cannot consume.

Key responsibilities:
- Parse SVG path data and transforms
- Reject non-path elements, clip paths and masks
- Write linear paths as SVG documents

Key classes:
- SvgReader: Load SVG documents and iterate drawable elements
- SvgWriter: Save paths as an SVG document
"""

from pathclip.io.converter import draw_path, parse_path_data, parse_transform
from pathclip.io.reader import (
    SvgElement,
    SvgReader,
    curve_path_from_element,
    linear_path_from_element,
)
from pathclip.io.writer import SvgWriter, format_path_data

__all__ = [
    "SvgElement",
    "SvgReader",
    "SvgWriter",
    "curve_path_from_element",
    "draw_path",
    "format_path_data",
    "linear_path_from_element",
    "parse_path_data",
    "parse_transform",
]
