"""Geometry primitives used by the arc converter and the interpreter.

Points, 1x2 and 2x2 matrix helpers, and a centre-form ellipse. All values
are immutable.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

Radians = float


@dataclass(frozen=True)
class Point:
    """A 2D coordinate."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    def reflected_through(self, center: "Point") -> "Point":
        """Return the point reflection of this point through ``center``."""
        return Point(2 * center.x - self.x, 2 * center.y - self.y)

    def is_close(self, other: "Point", tolerance: float = 1e-9) -> bool:
        return (math.isclose(self.x, other.x, rel_tol=tolerance, abs_tol=tolerance)
                and math.isclose(self.y, other.y, rel_tol=tolerance, abs_tol=tolerance))


ORIGIN = Point(0.0, 0.0)


class Sign(Enum):
    NEGATIVE = -1
    POSITIVE = 1

    @property
    def factor(self) -> float:
        return float(self.value)

    @classmethod
    def of(cls, value: float) -> "Sign":
        """Sign of a value; zero counts as positive."""
        return cls.NEGATIVE if value < 0 else cls.POSITIVE

    @classmethod
    def positive_if_different(cls, first: bool, second: bool) -> "Sign":
        return cls.POSITIVE if first != second else cls.NEGATIVE


@dataclass(frozen=True)
class Vector2:
    """A 1x2 matrix, used as a direction/magnitude helper."""

    a: float
    b: float

    def multiplied(self, factor: float) -> "Vector2":
        return Vector2(self.a * factor, self.b * factor)

    def plus(self, other: "Vector2") -> "Vector2":
        return Vector2(self.a + other.a, self.b + other.b)

    def dot(self, other: "Vector2") -> float:
        return self.a * other.a + self.b * other.b

    def magnitude(self) -> float:
        return math.sqrt(self.a * self.a + self.b * self.b)

    def as_point(self) -> Point:
        return Point(self.a, self.b)


@dataclass(frozen=True)
class Matrix2x2:
    """Row-major 2x2 matrix ``[[a, b], [c, d]]``."""

    a: float
    b: float
    c: float
    d: float

    def dot(self, other: Vector2) -> Vector2:
        return Vector2(
            self.a * other.a + self.b * other.b,
            self.c * other.a + self.d * other.b,
        )

    @classmethod
    def rotation(cls, theta: Radians) -> "Matrix2x2":
        """Counterclockwise rotation by ``theta``."""
        return cls(math.cos(theta), -math.sin(theta), math.sin(theta), math.cos(theta))

    @classmethod
    def inverse_rotation(cls, theta: Radians) -> "Matrix2x2":
        """Clockwise rotation by ``theta``, the inverse of rotation(theta)."""
        return cls(math.cos(theta), math.sin(theta), -math.sin(theta), math.cos(theta))


def angle_between(u: Vector2, v: Vector2) -> Radians:
    """Signed angle from ``u`` to ``v``.

    The magnitude comes from the dot product, the sign from the 2D cross
    product. The cosine is clamped to [-1, 1] against rounding.
    """
    sign = Sign.of(u.a * v.b - u.b * v.a)
    cosine = u.dot(v) / (u.magnitude() * v.magnitude())
    return sign.factor * math.acos(max(-1.0, min(1.0, cosine)))


@dataclass(frozen=True)
class Ellipse:
    """An ellipse in centre form.

    Attributes:
        center: Centre of the ellipse
        major_axis: Distance from the centre to the edge at angle 0,
            the x radius before tilting
        minor_axis: Distance from the centre to the edge at angle pi/2
        tilt_radians: Rotation of the major axis from the x axis
    """

    center: Point
    major_axis: float
    minor_axis: float
    tilt_radians: Radians = 0.0

    def __post_init__(self):
        if self.major_axis < 0 or self.minor_axis < 0:
            raise ValueError(
                f"Ellipse axes must be non-negative, got {self.major_axis}, {self.minor_axis}"
            )

    def point_at(self, angle: Radians) -> Point:
        """Point on the ellipse at ``angle`` from the positive major axis.

        See "Drawing an elliptical arc using polylines, quadratic or cubic
        Bezier curves" (L. Maisonobe).
        """
        a = self.major_axis
        b = self.minor_axis
        theta = self.tilt_radians
        x = self.center.x + a * math.cos(theta) * math.cos(angle) - b * math.sin(theta) * math.sin(angle)
        y = self.center.y + a * math.sin(theta) * math.cos(angle) + b * math.cos(theta) * math.sin(angle)
        return Point(x, y)

    def derivative_at(self, angle: Radians) -> Point:
        """Derivative of point_at with respect to the angle."""
        a = self.major_axis
        b = self.minor_axis
        theta = self.tilt_radians
        x = -a * math.cos(theta) * math.sin(angle) - b * math.sin(theta) * math.cos(angle)
        y = -a * math.sin(theta) * math.sin(angle) + b * math.cos(theta) * math.cos(angle)
        return Point(x, y)


@dataclass(frozen=True)
class EllipticCurve:
    """The part of an ellipse between two angles.

    Angles are in radians, counterclockwise from the major axis. A start of
    0 and an end of 2*pi is the full ellipse.
    """

    ellipse: Ellipse
    start_radians: Radians
    end_radians: Radians

    @property
    def sweep(self) -> Radians:
        return self.end_radians - self.start_radians

    @property
    def start_point(self) -> Point:
        return self.ellipse.point_at(self.start_radians)

    @property
    def end_point(self) -> Point:
        return self.ellipse.point_at(self.end_radians)


Rect = Tuple[float, float, float, float]
