"""SVG writer for saving processed paths."""

import xml.etree.ElementTree as ET
from pathlib import Path as FilePath

from fontTools.pens.svgPathPen import SVGPathPen

from pathclip.domain import Path
from pathclip.exceptions import SvgSaveError
from pathclip.io.converter import draw_path

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def format_path_data(path: Path, close_subpaths: bool | None = None) -> str:
    """Format a path as SVG path data.

    Args:
        path: Path to format
        close_subpaths: Close each subpath with Z (defaults to True for
            linear paths, which describe polygons)

    Returns:
        Value for a path's ``d`` attribute
    """
    if close_subpaths is None:
        close_subpaths = path.is_linear()

    pen = SVGPathPen(None)
    draw_path(path, pen, close_subpaths=close_subpaths)
    return pen.getCommands()


class SvgWriter:
    """Writes paths into a standalone SVG document.

    Example:
        writer = SvgWriter(Path("out.svg"))
        writer.add_path("outline", path)
        writer.save()
    """

    def __init__(self, output_path: FilePath) -> None:
        """Initialize the SVG writer.

        Args:
            output_path: Where to save the document
        """
        self._output_path = output_path
        self._paths: list[tuple[str, Path]] = []

    @staticmethod
    def get_clipped_path(input_path: FilePath) -> FilePath:
        """Generate the default output path: ``{stem}-clipped.svg``."""
        return input_path.with_name(f"{input_path.stem}-clipped.svg")

    def add_path(self, path_id: str, path: Path) -> None:
        """Queue a path for output; empty paths are written as empty data."""
        self._paths.append((path_id, path))

    def _view_box(self) -> str | None:
        points = [p for _, path in self._paths for p in path.points()]
        if not points:
            return None
        min_x = min(p.x for p in points)
        min_y = min(p.y for p in points)
        width = max(p.x for p in points) - min_x
        height = max(p.y for p in points) - min_y
        return f"{min_x:g} {min_y:g} {width:g} {height:g}"

    def to_element(self) -> ET.Element:
        """Build the SVG document element."""
        ET.register_namespace("", SVG_NAMESPACE)
        root = ET.Element(f"{{{SVG_NAMESPACE}}}svg", {"version": "1.1"})
        view_box = self._view_box()
        if view_box is not None:
            root.set("viewBox", view_box)

        for path_id, path in self._paths:
            ET.SubElement(
                root,
                f"{{{SVG_NAMESPACE}}}path",
                {
                    "id": path_id,
                    "d": format_path_data(path),
                    "fill-rule": "evenodd",
                },
            )
        return root

    def save(self) -> None:
        """Write the document.

        Raises:
            SvgSaveError: If the file cannot be written
        """
        tree = ET.ElementTree(self.to_element())
        try:
            tree.write(self._output_path, encoding="utf-8", xml_declaration=True)
        except OSError as e:
            raise SvgSaveError(str(self._output_path), str(e)) from e
