"""Path sinks: the receivers of interpreted draw calls.

A sink gets absolute move, line, cubic curve and close calls. Every sink
here tracks the current point the same way a graphics path does: a move
sets it and starts a subpath, lines and curves set it to their end, and a
close returns it to the subpath start.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .bezier import flatten_cubic
from .geometry import Point

# Set up logging
logger = logging.getLogger(__name__)

MOVE = "move"
LINE = "line"
CURVE = "curve"
CLOSE = "close"


class DrawCall(NamedTuple):
    """A recorded draw call.

    Curves store their points as (end, control1, control2), in the order
    curve_to takes them.
    """

    op: str
    points: Tuple[Point, ...] = ()


class PathSink(ABC):
    """Receiver of absolute draw calls."""

    @property
    @abstractmethod
    def current_point(self) -> Optional[Point]:
        """The pen position, or None before the first move."""

    @abstractmethod
    def move_to(self, point: Point) -> None:
        """Start a new subpath at ``point``."""

    @abstractmethod
    def line_to(self, point: Point) -> None:
        """Draw a straight line to ``point``."""

    @abstractmethod
    def curve_to(self, end: Point, control1: Point, control2: Point) -> None:
        """Draw a cubic Bezier curve to ``end``."""

    @abstractmethod
    def close_subpath(self) -> None:
        """Close the current subpath."""


class CursorSink(PathSink):
    """PathSink that keeps track of the current point and subpath start."""

    def __init__(self):
        self._current = None
        self._subpath_start = None

    @property
    def current_point(self) -> Optional[Point]:
        return self._current

    @property
    def subpath_start(self) -> Optional[Point]:
        return self._subpath_start

    def move_to(self, point: Point) -> None:
        self._current = point
        self._subpath_start = point

    def line_to(self, point: Point) -> None:
        self._current = point

    def curve_to(self, end: Point, control1: Point, control2: Point) -> None:
        self._current = end

    def close_subpath(self) -> None:
        self._current = self._subpath_start


class RecordingSink(CursorSink):
    """Sink that records every draw call in order."""

    def __init__(self):
        super().__init__()
        self.calls: List[DrawCall] = []

    def move_to(self, point: Point) -> None:
        self.calls.append(DrawCall(MOVE, (point,)))
        super().move_to(point)

    def line_to(self, point: Point) -> None:
        self.calls.append(DrawCall(LINE, (point,)))
        super().line_to(point)

    def curve_to(self, end: Point, control1: Point, control2: Point) -> None:
        self.calls.append(DrawCall(CURVE, (end, control1, control2)))
        super().curve_to(end, control1, control2)

    def close_subpath(self) -> None:
        self.calls.append(DrawCall(CLOSE))
        super().close_subpath()

    def ops(self) -> List[str]:
        """Return just the operation names of the recorded calls."""
        return [call.op for call in self.calls]


class TransformingSink(CursorSink):
    """Sink applying an affine transform before forwarding to another sink.

    The current point is kept in the untransformed coordinates, so the
    interpreter can keep working in path coordinates.
    """

    def __init__(self, target: PathSink, matrix: np.ndarray):
        """Initialize transforming sink.

        Args:
            target: Sink receiving transformed calls
            matrix: 3x3 affine transformation matrix
        """
        super().__init__()
        self.target = target
        self.matrix = np.asarray(matrix, dtype=float)
        if self.matrix.shape != (3, 3):
            raise ValueError(f"Expected a 3x3 matrix, got shape {self.matrix.shape}")

    def transform_point(self, point: Point) -> Point:
        """Transform a point using the sink's matrix.

        Args:
            point: Point in path coordinates

        Returns:
            Transformed point
        """
        transformed = np.dot(self.matrix, np.array([point.x, point.y, 1.0]))
        return Point(float(transformed[0]), float(transformed[1]))

    def move_to(self, point: Point) -> None:
        self.target.move_to(self.transform_point(point))
        super().move_to(point)

    def line_to(self, point: Point) -> None:
        self.target.line_to(self.transform_point(point))
        super().line_to(point)

    def curve_to(self, end: Point, control1: Point, control2: Point) -> None:
        self.target.curve_to(
            self.transform_point(end),
            self.transform_point(control1),
            self.transform_point(control2),
        )
        super().curve_to(end, control1, control2)

    def close_subpath(self) -> None:
        self.target.close_subpath()
        super().close_subpath()


def format_number(value: float, precision: int = 3) -> str:
    """Format a coordinate without trailing zeros.

    Args:
        value: Number to format
        precision: Maximum number of decimal places

    Returns:
        Formatted number, e.g. "10", "2.5", "-0.125"
    """
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


class SVGPathWriter(CursorSink):
    """Sink writing normalized SVG path data using only M, L, C and Z."""

    def __init__(self, precision: int = 3):
        super().__init__()
        self.precision = precision
        self.parts: List[str] = []

    def _points(self, *points: Point) -> str:
        return " ".join(
            f"{format_number(p.x, self.precision)} {format_number(p.y, self.precision)}"
            for p in points
        )

    def move_to(self, point: Point) -> None:
        self.parts.append(f"M{self._points(point)}")
        super().move_to(point)

    def line_to(self, point: Point) -> None:
        self.parts.append(f"L{self._points(point)}")
        super().line_to(point)

    def curve_to(self, end: Point, control1: Point, control2: Point) -> None:
        self.parts.append(f"C{self._points(control1, control2, end)}")
        super().curve_to(end, control1, control2)

    def close_subpath(self) -> None:
        self.parts.append("Z")
        super().close_subpath()

    @property
    def path_data(self) -> str:
        return " ".join(self.parts)


class PolylineSink(CursorSink):
    """Sink flattening the path into one polyline per subpath."""

    def __init__(self, curve_resolution: int = 20):
        """Initialize polyline sink.

        Args:
            curve_resolution: Number of segments used for each curve
        """
        super().__init__()
        if curve_resolution < 1:
            raise ValueError(f"curve_resolution must be positive, got {curve_resolution}")
        self.curve_resolution = curve_resolution
        self.polylines: List[List[Point]] = []
        self.closed: List[bool] = []

    def _ensure_polyline(self) -> List[Point]:
        # Drawing without a move starts a subpath at the current point or origin
        if not self.polylines or self.closed[-1]:
            start = self.current_point or Point(0.0, 0.0)
            self.move_to(start)
        return self.polylines[-1]

    def move_to(self, point: Point) -> None:
        if self.polylines and len(self.polylines[-1]) == 1 and not self.closed[-1]:
            # A move straight after another move replaces it
            self.polylines[-1] = [point]
        else:
            self.polylines.append([point])
            self.closed.append(False)
        super().move_to(point)

    def line_to(self, point: Point) -> None:
        self._ensure_polyline().append(point)
        super().line_to(point)

    def curve_to(self, end: Point, control1: Point, control2: Point) -> None:
        polyline = self._ensure_polyline()
        polyline.extend(flatten_cubic(self.current_point, control1, control2, end, self.curve_resolution))
        super().curve_to(end, control1, control2)

    def close_subpath(self) -> None:
        if not self.polylines or self.closed[-1]:
            logger.debug("Ignoring close without an open subpath")
            return
        polyline = self.polylines[-1]
        if polyline[-1] != polyline[0]:
            polyline.append(polyline[0])
        self.closed[-1] = True
        super().close_subpath()
