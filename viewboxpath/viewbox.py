"""Viewbox handling.

A ViewboxPath pairs path data with the viewbox it was authored in. Drawing
it into a target size scales viewbox coordinates with a 3x3 affine matrix.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .commands import PathCommand
from .errors import ParseDiagnostic
from .geometry import Radians, Rect
from .interpreter import draw
from .parser import parse
from .sinks import PathSink, TransformingSink

# Set up logging
logger = logging.getLogger(__name__)


def viewbox_transform(viewbox: Rect, width: float, height: float) -> np.ndarray:
    """Build the matrix mapping viewbox coordinates onto a target size.

    The viewbox origin maps to (0, 0) and its far corner to (width, height).

    Args:
        viewbox: Viewbox as (min_x, min_y, width, height)
        width: Target width
        height: Target height

    Returns:
        3x3 transformation matrix as numpy array
    """
    min_x, min_y, vb_width, vb_height = viewbox
    if vb_width <= 0 or vb_height <= 0:
        raise ValueError(f"Viewbox must have a positive size, got {viewbox}")

    translate = np.array([
        [1, 0, -min_x],
        [0, 1, -min_y],
        [0, 0, 1]
    ], dtype=float)
    scale = np.array([
        [width / vb_width, 0, 0],
        [0, height / vb_height, 0],
        [0, 0, 1]
    ], dtype=float)
    return np.dot(scale, translate)


class ViewboxPath:
    """Path data together with the viewbox it is expressed in."""

    def __init__(self, viewbox: Rect, path_string: str, transform: Optional[np.ndarray] = None):
        """Initialize viewbox path.

        Args:
            viewbox: Viewbox as (min_x, min_y, width, height)
            path_string: SVG path data
            transform: Extra 3x3 matrix applied before the viewbox mapping,
                e.g. accumulated group transforms (optional)
        """
        self.viewbox = tuple(float(v) for v in viewbox)
        self.path_string = path_string
        self.transform = np.identity(3) if transform is None else np.asarray(transform, dtype=float)

    def __repr__(self) -> str:
        preview = self.path_string[:30] + "..." if len(self.path_string) > 30 else self.path_string
        return f"ViewboxPath(viewbox={self.viewbox}, path={preview!r})"

    @property
    def aspect_ratio(self) -> float:
        return self.viewbox[2] / self.viewbox[3]

    def size_for_height(self, height: float) -> Tuple[float, float]:
        """Return the (width, height) keeping the viewbox's aspect ratio."""
        return height * self.aspect_ratio, height

    def commands(self, compact_arc_flags: bool = True) -> List[PathCommand]:
        return parse(self.path_string, compact_arc_flags=compact_arc_flags)

    def matrix(self, width: Optional[float] = None, height: Optional[float] = None) -> np.ndarray:
        """Full transform from path coordinates to the target size.

        Without a target size, coordinates stay in viewbox units.
        """
        if width is None and height is None:
            return self.transform
        if width is None:
            width, _ = self.size_for_height(height)
        elif height is None:
            height = width / self.aspect_ratio
        return np.dot(viewbox_transform(self.viewbox, width, height), self.transform)

    def render(self, sink: PathSink, width: Optional[float] = None, height: Optional[float] = None,
               compact_arc_flags: bool = True,
               max_arc_span: Optional[Radians] = None) -> List[ParseDiagnostic]:
        """Draw the path into a sink, scaled to the target size.

        Args:
            sink: Sink receiving transformed draw calls
            width: Target width (optional)
            height: Target height (optional)
            compact_arc_flags: Read arc flags as single digits
            max_arc_span: Largest arc span drawn with a single curve (radians)

        Returns:
            Diagnostics from parsing and drawing
        """
        matrix = self.matrix(width, height)
        logger.debug(f"Rendering {self!r} with matrix {matrix.tolist()}")
        return draw(
            self.path_string,
            TransformingSink(sink, matrix),
            compact_arc_flags=compact_arc_flags,
            max_arc_span=max_arc_span,
        )
