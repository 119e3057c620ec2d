"""Path interpreter.

Folds a list of PathCommand values into absolute draw calls on a PathSink.
The pen position, subpath start and the control points remembered for the
smooth curve shorthands are threaded through the fold as an immutable
ParseState.

After a close path the current point is the start of the closed subpath,
so relative commands following Z are measured from there.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Type

from .arc import EndpointArcParameterization, correct_radii
from .bezier import add_curve_approximating, elevate_quadratic
from .commands import (
    PATH_COMMAND_TYPES,
    ClosePath,
    CubicCurve,
    CubicCurveRelative,
    EllipticalArc,
    EllipticalArcRelative,
    HorizontalLine,
    HorizontalLineRelative,
    LineTo,
    LineToRelative,
    MoveTo,
    MoveToRelative,
    PathCommand,
    QuadCurve,
    QuadCurveRelative,
    SmoothCubicCurve,
    SmoothCubicCurveRelative,
    SmoothQuadCurve,
    SmoothQuadCurveRelative,
    VerticalLine,
    VerticalLineRelative,
)
from .errors import DegenerateArcError, DiagnosticKind, ParseDiagnostic
from .geometry import ORIGIN, Ellipse, Point, Radians
from .parser import parse_with_diagnostics
from .sinks import PathSink

# Set up logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseState:
    """Interpreter state between two commands.

    Attributes:
        current_point: Pen position
        subpath_start: Where the current subpath began
        last_cubic_control: Second control point of the previous command if
            it was a cubic curve, else None
        last_quad_control: Control point of the previous command if it was
            a quadratic curve, else None
    """

    current_point: Point = ORIGIN
    subpath_start: Point = ORIGIN
    last_cubic_control: Optional[Point] = None
    last_quad_control: Optional[Point] = None

    def at(self, point: Point) -> "ParseState":
        """State after drawing a non-curve segment to ``point``."""
        return replace(self, current_point=point, last_cubic_control=None, last_quad_control=None)

    def relative(self, dx: float, dy: float) -> Point:
        return Point(self.current_point.x + dx, self.current_point.y + dy)


class _Pass(NamedTuple):
    sink: PathSink
    max_arc_span: Optional[Radians]
    diagnostics: List[ParseDiagnostic]


def _move(state: ParseState, point: Point, run: _Pass) -> ParseState:
    run.sink.move_to(point)
    return ParseState(current_point=point, subpath_start=point)


def _line(state: ParseState, point: Point, run: _Pass) -> ParseState:
    run.sink.line_to(point)
    return state.at(point)


def _cubic(state: ParseState, control1: Point, control2: Point, end: Point, run: _Pass) -> ParseState:
    run.sink.curve_to(end, control1, control2)
    return ParseState(
        current_point=end,
        subpath_start=state.subpath_start,
        last_cubic_control=control2,
    )


def _quad(state: ParseState, control: Point, end: Point, run: _Pass) -> ParseState:
    control1, control2 = elevate_quadratic(state.current_point, control, end)
    run.sink.curve_to(end, control1, control2)
    return ParseState(
        current_point=end,
        subpath_start=state.subpath_start,
        last_quad_control=control,
    )


def _smooth_cubic_control(state: ParseState) -> Point:
    if state.last_cubic_control is None:
        return state.current_point
    return state.last_cubic_control.reflected_through(state.current_point)


def _smooth_quad_control(state: ParseState) -> Point:
    if state.last_quad_control is None:
        return state.current_point
    return state.last_quad_control.reflected_through(state.current_point)


def _report(run: _Pass, command: PathCommand, message: str) -> None:
    diagnostic = ParseDiagnostic(DiagnosticKind.DEGENERATE_GEOMETRY, command.letter, -1, message)
    logger.warning(f"Path geometry: {diagnostic}")
    run.diagnostics.append(diagnostic)


def _arc(state: ParseState, command, end: Point, run: _Pass) -> ParseState:
    start = state.current_point
    tilt = math.radians(command.tilt_degrees)

    if command.rx == 0 or command.ry == 0:
        _report(run, command, "zero radius, drawn as a straight line")
        return _line(state, end, run)

    if start == end:
        _report(run, command, "endpoints coincide, arc omitted")
        return state.at(end)

    radii = correct_radii(start, end, Point(command.rx, command.ry), tilt)
    parameterization = EndpointArcParameterization(
        point1=start,
        point2=end,
        large_arc=command.large_arc,
        sweep=command.sweep,
        radii=radii,
        tilt_radians=tilt,
    )
    try:
        center = parameterization.to_center()
    except DegenerateArcError as e:
        _report(run, command, f"{e}, drawn as a straight line")
        return _line(state, end, run)

    ellipse = Ellipse(center.center, radii.x, radii.y, tilt)
    add_curve_approximating(run.sink, ellipse, center.start_angle, center.end_angle, run.max_arc_span)
    return state.at(end)


def _close(state: ParseState, command: ClosePath, run: _Pass) -> ParseState:
    run.sink.close_subpath()
    return ParseState(current_point=state.subpath_start, subpath_start=state.subpath_start)


Handler = Callable[[ParseState, PathCommand, _Pass], ParseState]

_HANDLERS: Dict[Type, Handler] = {
    MoveTo: lambda s, c, r: _move(s, Point(c.x, c.y), r),
    MoveToRelative: lambda s, c, r: _move(s, s.relative(c.dx, c.dy), r),
    LineTo: lambda s, c, r: _line(s, Point(c.x, c.y), r),
    LineToRelative: lambda s, c, r: _line(s, s.relative(c.dx, c.dy), r),
    HorizontalLine: lambda s, c, r: _line(s, Point(c.x, s.current_point.y), r),
    HorizontalLineRelative: lambda s, c, r: _line(s, s.relative(c.dx, 0.0), r),
    VerticalLine: lambda s, c, r: _line(s, Point(s.current_point.x, c.y), r),
    VerticalLineRelative: lambda s, c, r: _line(s, s.relative(0.0, c.dy), r),
    CubicCurve: lambda s, c, r: _cubic(
        s, Point(c.x1, c.y1), Point(c.x2, c.y2), Point(c.x, c.y), r
    ),
    CubicCurveRelative: lambda s, c, r: _cubic(
        s, s.relative(c.dx1, c.dy1), s.relative(c.dx2, c.dy2), s.relative(c.dx, c.dy), r
    ),
    SmoothCubicCurve: lambda s, c, r: _cubic(
        s, _smooth_cubic_control(s), Point(c.x2, c.y2), Point(c.x, c.y), r
    ),
    SmoothCubicCurveRelative: lambda s, c, r: _cubic(
        s, _smooth_cubic_control(s), s.relative(c.dx2, c.dy2), s.relative(c.dx, c.dy), r
    ),
    QuadCurve: lambda s, c, r: _quad(s, Point(c.x1, c.y1), Point(c.x, c.y), r),
    QuadCurveRelative: lambda s, c, r: _quad(
        s, s.relative(c.dx1, c.dy1), s.relative(c.dx, c.dy), r
    ),
    SmoothQuadCurve: lambda s, c, r: _quad(s, _smooth_quad_control(s), Point(c.x, c.y), r),
    SmoothQuadCurveRelative: lambda s, c, r: _quad(
        s, _smooth_quad_control(s), s.relative(c.dx, c.dy), r
    ),
    EllipticalArc: lambda s, c, r: _arc(s, c, Point(c.x, c.y), r),
    EllipticalArcRelative: lambda s, c, r: _arc(s, c, s.relative(c.dx, c.dy), r),
    ClosePath: _close,
}

_missing = set(PATH_COMMAND_TYPES) - set(_HANDLERS)
if _missing:
    raise TypeError(f"No interpreter handler for {sorted(cls.__name__ for cls in _missing)}")


def step(state: ParseState, command: PathCommand, sink: PathSink,
         max_arc_span: Optional[Radians] = None,
         diagnostics: Optional[List[ParseDiagnostic]] = None) -> ParseState:
    """Apply one command to a sink.

    Args:
        state: State before the command
        command: Command to apply
        sink: Sink receiving draw calls
        max_arc_span: Largest arc span drawn with a single curve (radians),
            None to draw every arc as one curve
        diagnostics: List collecting geometry diagnostics (optional)

    Returns:
        State after the command
    """
    if diagnostics is None:
        diagnostics = []
    return _apply(state, command, _Pass(sink, max_arc_span, diagnostics))


def _apply(state: ParseState, command: PathCommand, run: _Pass) -> ParseState:
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Not a path command: {command!r}")
    return handler(state, command, run)


def interpret(commands: Iterable[PathCommand], sink: PathSink,
              max_arc_span: Optional[Radians] = None) -> List[ParseDiagnostic]:
    """Draw a command sequence into a sink.

    Args:
        commands: Parsed path commands
        sink: Sink receiving draw calls
        max_arc_span: Largest arc span drawn with a single curve (radians),
            None to draw every arc as one curve

    Returns:
        Geometry diagnostics raised while drawing
    """
    run = _Pass(sink, max_arc_span, [])
    state = ParseState()
    count = 0
    for command in commands:
        state = _apply(state, command, run)
        count += 1

    logger.debug(f"Interpreted {count} commands, ending at ({state.current_point.x}, {state.current_point.y})")
    return run.diagnostics


def draw(path_data: str, sink: PathSink, compact_arc_flags: bool = True,
         max_arc_span: Optional[Radians] = None) -> List[ParseDiagnostic]:
    """Parse path data and draw it into a sink.

    Args:
        path_data: SVG path data string
        sink: Sink receiving draw calls
        compact_arc_flags: Read arc flags as single digits
        max_arc_span: Largest arc span drawn with a single curve (radians)

    Returns:
        Parse diagnostics followed by geometry diagnostics
    """
    result = parse_with_diagnostics(path_data, compact_arc_flags=compact_arc_flags)
    return result.diagnostics + interpret(result.commands, sink, max_arc_span=max_arc_span)
