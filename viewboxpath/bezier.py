"""Bezier curve helpers.

Approximates elliptical arc spans with cubic Bezier curves, elevates
quadratic curves to cubics, and flattens curves into points.
"""

import math
from typing import List, NamedTuple, Optional, Tuple

from .arc import split_sweep
from .geometry import Ellipse, EllipticCurve, Point, Radians


class CubicSegment(NamedTuple):
    """A cubic Bezier curve given by its four points."""

    start: Point
    control1: Point
    control2: Point
    end: Point


def arc_alpha(delta: Radians) -> float:
    """Tangent scaling factor for a single-curve arc approximation.

    Args:
        delta: Angular span of the arc

    Returns:
        sin(delta) * (sqrt(4 + 3 tan^2(delta / 2)) - 1) / 3
    """
    return math.sin(delta) * (math.sqrt(4 + 3 * math.tan(delta / 2) ** 2) - 1) / 3


def approximate_arc(curve: EllipticCurve) -> CubicSegment:
    """Approximate an ellipse span with one cubic Bezier curve.

    The curve is close for spans up to about a quarter turn and drifts
    further from the ellipse as the span grows.

    See "Drawing an elliptical arc using polylines, quadratic or cubic
    Bezier curves" (L. Maisonobe), http://www.spaceroots.org/documents/ellipse/

    Args:
        curve: Ellipse span to approximate

    Returns:
        The approximating curve
    """
    ellipse = curve.ellipse
    p1 = curve.start_point
    p2 = curve.end_point
    alpha = arc_alpha(curve.sweep)

    q1 = p1 + ellipse.derivative_at(curve.start_radians) * alpha
    q2 = p2 - ellipse.derivative_at(curve.end_radians) * alpha
    return CubicSegment(p1, q1, q2, p2)


def add_curve_approximating(sink, ellipse: Ellipse, start: Radians, end: Radians,
                            max_span: Optional[Radians] = None) -> int:
    """Draw an ellipse span into a path sink.

    A move is emitted first when the sink's current point is not the
    span's start point.

    Args:
        sink: PathSink to draw into
        ellipse: Ellipse the span belongs to
        start: Start angle from the major axis
        end: End angle from the major axis
        max_span: If set, split the span into equal pieces no larger than this

    Returns:
        Number of curves emitted
    """
    if max_span:
        pieces = split_sweep(start, end - start, max_span)
    else:
        pieces = ((start, end),)

    for index, (piece_start, piece_end) in enumerate(pieces):
        segment = approximate_arc(EllipticCurve(ellipse, piece_start, piece_end))
        if index == 0:
            current = sink.current_point
            if current is None or not current.is_close(segment.start):
                sink.move_to(segment.start)
        sink.curve_to(segment.end, segment.control1, segment.control2)

    return len(pieces)


def elevate_quadratic(start: Point, control: Point, end: Point) -> Tuple[Point, Point]:
    """Return the cubic control points equivalent to a quadratic curve.

    Args:
        start: Start point
        control: Quadratic control point
        end: End point

    Returns:
        (control1, control2) of the equivalent cubic
    """
    control1 = start + (control - start) * (2.0 / 3.0)
    control2 = end + (control - end) * (2.0 / 3.0)
    return control1, control2


def flatten_cubic(p0: Point, p1: Point, p2: Point, p3: Point, segments: int) -> List[Point]:
    """Sample a cubic Bezier curve.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        segments: Number of line segments to use

    Returns:
        Points along the curve, excluding the start point
    """
    points = []

    for i in range(1, segments + 1):
        t = i / segments

        # B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3
        t_inv = 1 - t
        t_inv_squared = t_inv * t_inv
        t_inv_cubed = t_inv_squared * t_inv
        t_squared = t * t
        t_cubed = t_squared * t

        x = t_inv_cubed * p0.x + 3 * t_inv_squared * t * p1.x + 3 * t_inv * t_squared * p2.x + t_cubed * p3.x
        y = t_inv_cubed * p0.y + 3 * t_inv_squared * t * p1.y + 3 * t_inv * t_squared * p2.y + t_cubed * p3.y

        points.append(Point(x, y))

    return points
