"""pathclip - Flatten vector paths into integer polygons for clipping and offsetting.

pathclip converts vector-graphics paths (moves, lines and cubic Bezier
curves) into polygon sets in the fixed-precision integer domain used by
the Clipper polygon engine, runs boolean and offset operations there, and
converts the results back into paths.

Example:
    $ pathclip drawing.svg --offset 4.5

This will create drawing-clipped.svg with every path flattened, cleaned
and grown by 4.5 SVG units.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
