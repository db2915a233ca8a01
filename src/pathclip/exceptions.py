"""Exception hierarchy for pathclip."""


class PathClipError(Exception):
    """Base exception for all pathclip errors."""

    pass


class PathError(PathClipError):
    """Errors related to the structure of a path or its source element."""

    pass


class MalformedPathError(PathError):
    """Path violates the move/line/curve structure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UnsupportedElementError(PathError):
    """Source graphic element cannot be consumed as a path."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"{tag} is not supported; try converting the object to a path")


class GeometryError(PathClipError):
    """Errors in geometric calculations."""

    pass


class ToleranceTooTightError(GeometryError):
    """Curve flattening did not converge within the subdivision cap."""

    def __init__(self, min_segment_length: float, max_segments: int) -> None:
        self.min_segment_length = min_segment_length
        self.max_segments = max_segments
        super().__init__(
            f"Curve cannot be flattened to segments of {min_segment_length} "
            f"within {max_segments} segments"
        )


class GeometryEngineError(GeometryError):
    """Polygon engine failed on integer geometry."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Polygon engine failed during {operation}: {reason}")


class SvgError(PathClipError):
    """Errors related to SVG loading or saving."""

    pass


class SvgLoadError(SvgError):
    """Error loading an SVG file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load SVG '{path}': {reason}")


class SvgSaveError(SvgError):
    """Error saving an SVG file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save SVG '{path}': {reason}")
