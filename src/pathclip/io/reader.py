"""SVG reader for extracting drawable elements.

This module provides the SvgReader class for loading SVG documents and
linear_path_from_element, which turns one element into a linear path or
reports why it cannot.
"""

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path as FilePath

from fontTools.misc.transform import Identity, Transform

from pathclip.config import FlattenConfig
from pathclip.core.linearize import linearize_path
from pathclip.domain import Path
from pathclip.exceptions import MalformedPathError, PathError, UnsupportedElementError
from pathclip.io.converter import parse_path_data, parse_transform
from pathclip.utils.logging import ErrorReporter, report_error

# Elements whose children are drawn
CONTAINER_TAGS = frozenset({"svg", "g", "a", "switch"})

# Elements that never draw directly
NON_RENDERED_TAGS = frozenset(
    {
        "defs",
        "clipPath",
        "mask",
        "symbol",
        "marker",
        "pattern",
        "linearGradient",
        "radialGradient",
        "filter",
        "style",
        "script",
        "title",
        "desc",
        "metadata",
        "namedview",
    }
)


def _local_name(tag: str) -> str:
    """Strip the XML namespace from a tag."""
    return tag.rsplit("}", 1)[-1]


def _style_properties(style: str | None) -> dict[str, str]:
    properties: dict[str, str] = {}
    for declaration in (style or "").split(";"):
        if ":" in declaration:
            name, value = declaration.split(":", 1)
            properties[name.strip()] = value.strip()
    return properties


@dataclass(frozen=True)
class SvgElement:
    """A drawable SVG element with its resolved global transform.

    Attributes:
        tag: Element name without namespace (e.g. "path", "rect")
        element_id: Value of the id attribute, if any
        attributes: Element attributes with namespaces stripped
        transform: Product of all ancestor and own transforms
    """

    tag: str
    element_id: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    transform: Transform = Identity

    def attr(self, name: str, default: str = "none") -> str:
        """Look up a presentation attribute, honouring inline style."""
        style = _style_properties(self.attributes.get("style"))
        if name in style:
            return style[name]
        return self.attributes.get(name, default)


class SvgReader:
    """Loads SVG documents and yields their drawable elements.

    Example:
        reader = SvgReader(Path("drawing.svg"))
        reader.load()
        for element in reader.iter_elements():
            print(element.tag, element.element_id)
    """

    def __init__(self, svg_path: FilePath) -> None:
        """Initialize the SVG reader.

        Args:
            svg_path: Path to the SVG file
        """
        self._svg_path = svg_path
        self._root: ET.Element | None = None

    def load(self) -> None:
        """Load the SVG file.

        Raises:
            FileNotFoundError: If the file does not exist
            xml.etree.ElementTree.ParseError: If the file is not valid XML
        """
        if not self._svg_path.exists():
            raise FileNotFoundError(f"SVG file not found: {self._svg_path}")

        self._root = ET.parse(self._svg_path).getroot()

    @classmethod
    def from_string(cls, text: str) -> "SvgReader":
        """Create a loaded reader from SVG source text."""
        reader = cls(FilePath("<string>"))
        reader._root = ET.fromstring(text)
        return reader

    @property
    def element_count(self) -> int:
        """Number of drawable elements in the document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        return sum(1 for _ in self.iter_elements())

    def iter_elements(self) -> Iterator[SvgElement]:
        """Iterate over drawable elements in document order.

        Containers are descended into and their transforms accumulated;
        non-rendered subtrees (defs, clip paths, masks, ...) are skipped.

        Yields:
            SvgElement for every non-container drawable element

        Raises:
            RuntimeError: If the document has not been loaded yet
            MalformedPathError: If a transform attribute cannot be parsed
        """
        if self._root is None:
            raise RuntimeError("SVG not loaded. Call load() first.")

        yield from self._walk(self._root, Identity)

    def _walk(self, node: ET.Element, parent: Transform) -> Iterator[SvgElement]:
        tag = _local_name(node.tag)
        if tag in NON_RENDERED_TAGS:
            return

        attributes = {_local_name(k): v for k, v in node.attrib.items()}
        transform = parent.transform(parse_transform(attributes.get("transform")))

        if tag in CONTAINER_TAGS:
            for child in node:
                if isinstance(child.tag, str):
                    yield from self._walk(child, transform)
            return

        yield SvgElement(
            tag=tag,
            element_id=attributes.get("id"),
            attributes=attributes,
            transform=transform,
        )


def curve_path_from_element(element: SvgElement) -> Path | None:
    """Get the curve-form path of an element in global coordinates.

    Returns:
        Path of moves and cubics, or None for the root svg element

    Raises:
        UnsupportedElementError: If the element is not a path
        MalformedPathError: If the element uses clip-path or mask, has no
            path data, or its path data cannot be parsed
    """
    if element.tag == "svg":
        return None
    if element.tag != "path":
        raise UnsupportedElementError(element.tag)
    if element.attr("clip-path") != "none":
        raise MalformedPathError("clip-path is not supported")
    if element.attr("mask") != "none":
        raise MalformedPathError("mask is not supported")

    d = element.attributes.get("d")
    if d is None:
        raise MalformedPathError("path is missing")

    return parse_path_data(d, element.transform)


def linear_path_from_element(
    element: SvgElement,
    tolerances: FlattenConfig,
    report: ErrorReporter | None = None,
) -> Path | None:
    """Get a linear path from an element.

    Calls ``report`` with an error message and returns None if there is a
    problem. Returns None without reporting for the root svg element.

    Args:
        element: Element to convert
        tolerances: Flattening tolerances in plane units
        report: Called with a message when the element is rejected

    Returns:
        Linear path in global plane coordinates, or None
    """
    try:
        path = curve_path_from_element(element)
    except PathError as e:
        report_error(e, report)
        return None

    if path is None:
        return None
    return linearize_path(path, tolerances, report)
