"""Elliptical arc conversion from endpoint to centre parameterization.

Follows the SVG 1.1 implementation notes, appendix F.6.5:
https://www.w3.org/TR/SVG11/implnote.html#ArcImplementationNotes
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from .errors import DegenerateArcError
from .geometry import (
    Matrix2x2,
    Point,
    Radians,
    Sign,
    Vector2,
    angle_between,
)

# Set up logging
logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi
RADII_TOLERANCE = 1e-9


@dataclass(frozen=True)
class CenterArcParameterization:
    """An arc as centre, start angle and signed sweep."""

    center: Point
    start_angle: Radians
    sweep_delta: Radians

    @property
    def end_angle(self) -> Radians:
        return self.start_angle + self.sweep_delta


@dataclass(frozen=True)
class EndpointArcParameterization:
    """An arc as written in path data: two endpoints, radii, tilt and flags.

    Attributes:
        point1: Start point (the current point)
        point2: End point
        large_arc: Choose the arc spanning more than 180 degrees
        sweep: Draw in the positive-angle direction
        radii: (rx, ry) as a point
        tilt_radians: Rotation of the ellipse's x axis
    """

    point1: Point
    point2: Point
    large_arc: bool
    sweep: bool
    radii: Point
    tilt_radians: Radians

    def to_center(self) -> CenterArcParameterization:
        """Convert to centre parameterization.

        Returns:
            CenterArcParameterization of the same arc

        Raises:
            DegenerateArcError: If a radius is zero, the endpoints coincide,
                or the conversion does not produce finite values
        """
        rx, ry = self.radii.x, self.radii.y
        tilt = self.tilt_radians

        if rx == 0 or ry == 0:
            raise DegenerateArcError(f"Arc has a zero radius: rx={rx}, ry={ry}")
        if self.point1 == self.point2:
            raise DegenerateArcError(f"Arc endpoints coincide at ({self.point1.x}, {self.point1.y})")

        # Step 1: endpoints in the ellipse's own frame
        half_chord = Vector2(
            (self.point1.x - self.point2.x) / 2,
            (self.point1.y - self.point2.y) / 2,
        )
        prime = Matrix2x2.inverse_rotation(tilt).dot(half_chord).as_point()

        # Step 2: centre in the ellipse's own frame
        sign = Sign.positive_if_different(self.large_arc, self.sweep)
        numerator = rx * rx * ry * ry - rx * rx * prime.y * prime.y - ry * ry * prime.x * prime.x
        denominator = rx * rx * prime.y * prime.y + ry * ry * prime.x * prime.x
        ratio = numerator / denominator
        if ratio < -RADII_TOLERANCE:
            raise DegenerateArcError(
                f"Arc radii ({rx}, {ry}) are too small to span the endpoints"
            )
        # Radii that exactly span the chord can round to a tiny negative value
        sqrt_factor = math.sqrt(max(0.0, ratio))
        center_prime = Vector2(rx * prime.y / ry, -ry * prime.x / rx).multiplied(sign.factor * sqrt_factor)

        # Step 3: centre back in the original frame
        midpoint = Vector2(
            (self.point1.x + self.point2.x) / 2,
            (self.point1.y + self.point2.y) / 2,
        )
        center = Matrix2x2.rotation(tilt).dot(center_prime).plus(midpoint)

        # Step 4: start angle and sweep
        start_vector = Vector2(
            (prime.x - center_prime.a) / rx,
            (prime.y - center_prime.b) / ry,
        )
        end_vector = Vector2(
            (-prime.x - center_prime.a) / rx,
            (-prime.y - center_prime.b) / ry,
        )
        start_angle = angle_between(Vector2(1, 0), start_vector)
        delta = angle_between(start_vector, end_vector)

        if not self.sweep and delta > 0:
            delta -= TWO_PI
        elif self.sweep and delta < 0:
            delta += TWO_PI

        result = CenterArcParameterization(center.as_point(), start_angle, delta)
        if not all(map(math.isfinite, (result.center.x, result.center.y, start_angle, delta))):
            raise DegenerateArcError(f"Arc conversion produced non-finite values: {result}")
        return result


def correct_radii(point1: Point, point2: Point, radii: Point, tilt: Radians) -> Point:
    """Scale radii up when they are too small to reach between the endpoints.

    Implements the out-of-range radii correction of SVG 1.1 F.6.6. Negative
    radii are made positive.

    Args:
        point1: Start point
        point2: End point
        radii: (rx, ry) as a point
        tilt: Ellipse rotation in radians

    Returns:
        Corrected radii
    """
    rx, ry = abs(radii.x), abs(radii.y)
    if rx == 0 or ry == 0:
        return Point(rx, ry)

    half_chord = Vector2((point1.x - point2.x) / 2, (point1.y - point2.y) / 2)
    prime = Matrix2x2.inverse_rotation(tilt).dot(half_chord)
    scale = (prime.a * prime.a) / (rx * rx) + (prime.b * prime.b) / (ry * ry)
    if scale > 1:
        logger.debug(f"Scaling arc radii ({rx}, {ry}) by {math.sqrt(scale):.6f}")
        rx *= math.sqrt(scale)
        ry *= math.sqrt(scale)
    return Point(rx, ry)


def split_sweep(start: Radians, sweep: Radians, max_span: Radians) -> Tuple[Tuple[Radians, Radians], ...]:
    """Split an angular span into equal pieces no larger than ``max_span``.

    Args:
        start: Start angle
        sweep: Signed sweep
        max_span: Largest allowed piece, positive

    Returns:
        Tuple of (start, end) angle pairs covering the span in order
    """
    count = max(1, math.ceil(abs(sweep) / max_span - 1e-12))
    step = sweep / count
    return tuple((start + i * step, start + (i + 1) * step) for i in range(count))
