"""Path command types.

Each SVG path command letter maps to exactly one frozen dataclass. The set
of classes is closed: PATH_COMMAND_TYPES lists every variant and the
interpreter refuses to load unless it handles all of them.
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Type, Union


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float
    letter = "M"


@dataclass(frozen=True)
class MoveToRelative:
    dx: float
    dy: float
    letter = "m"


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float
    letter = "L"


@dataclass(frozen=True)
class LineToRelative:
    dx: float
    dy: float
    letter = "l"


@dataclass(frozen=True)
class HorizontalLine:
    x: float
    letter = "H"


@dataclass(frozen=True)
class HorizontalLineRelative:
    dx: float
    letter = "h"


@dataclass(frozen=True)
class VerticalLine:
    y: float
    letter = "V"


@dataclass(frozen=True)
class VerticalLineRelative:
    dy: float
    letter = "v"


@dataclass(frozen=True)
class CubicCurve:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float
    letter = "C"


@dataclass(frozen=True)
class CubicCurveRelative:
    dx1: float
    dy1: float
    dx2: float
    dy2: float
    dx: float
    dy: float
    letter = "c"


@dataclass(frozen=True)
class SmoothCubicCurve:
    """Cubic curve whose first control point reflects the previous curve's."""

    x2: float
    y2: float
    x: float
    y: float
    letter = "S"


@dataclass(frozen=True)
class SmoothCubicCurveRelative:
    dx2: float
    dy2: float
    dx: float
    dy: float
    letter = "s"


@dataclass(frozen=True)
class QuadCurve:
    x1: float
    y1: float
    x: float
    y: float
    letter = "Q"


@dataclass(frozen=True)
class QuadCurveRelative:
    dx1: float
    dy1: float
    dx: float
    dy: float
    letter = "q"


@dataclass(frozen=True)
class SmoothQuadCurve:
    """Quadratic curve whose control point reflects the previous curve's."""

    x: float
    y: float
    letter = "T"


@dataclass(frozen=True)
class SmoothQuadCurveRelative:
    dx: float
    dy: float
    letter = "t"


@dataclass(frozen=True)
class EllipticalArc:
    """Elliptical arc to an absolute endpoint.

    The tilt is in degrees, as written in path data.
    """

    rx: float
    ry: float
    tilt_degrees: float
    large_arc: bool
    sweep: bool
    x: float
    y: float
    letter = "A"


@dataclass(frozen=True)
class EllipticalArcRelative:
    rx: float
    ry: float
    tilt_degrees: float
    large_arc: bool
    sweep: bool
    dx: float
    dy: float
    letter = "a"


@dataclass(frozen=True)
class ClosePath:
    letter = "Z"


PathCommand = Union[
    MoveTo, MoveToRelative,
    LineTo, LineToRelative,
    HorizontalLine, HorizontalLineRelative,
    VerticalLine, VerticalLineRelative,
    CubicCurve, CubicCurveRelative,
    SmoothCubicCurve, SmoothCubicCurveRelative,
    QuadCurve, QuadCurveRelative,
    SmoothQuadCurve, SmoothQuadCurveRelative,
    EllipticalArc, EllipticalArcRelative,
    ClosePath,
]

PATH_COMMAND_TYPES: Tuple[Type, ...] = PathCommand.__args__

COMMAND_LETTERS = "MmLlHhVvCcSsQqTtAaZz"

COMMANDS_BY_LETTER: Dict[str, Type] = {
    cls.letter: cls for cls in PATH_COMMAND_TYPES
}
COMMANDS_BY_LETTER["z"] = ClosePath
