#!/usr/bin/env python3
"""Tests for the endpoint to centre arc conversion."""

import logging
import math
import sys

import pytest

from viewboxpath.arc import EndpointArcParameterization, correct_radii, split_sweep
from viewboxpath.errors import DegenerateArcError, PathError
from viewboxpath.geometry import Ellipse, Point

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("test_arc")

HALF_HEIGHT = 10 * math.sqrt(3) / 2


def chord_arc(large_arc, sweep, radius=10.0):
    """Arc from (0, 0) to (10, 0) on a circle."""
    return EndpointArcParameterization(
        point1=Point(0, 0),
        point2=Point(10, 0),
        large_arc=large_arc,
        sweep=sweep,
        radii=Point(radius, radius),
        tilt_radians=0.0,
    )


def test_small_positive_sweep():
    center = chord_arc(large_arc=False, sweep=True).to_center()
    logger.info(f"Centre form: {center}")
    assert center.center.x == pytest.approx(5)
    assert center.center.y == pytest.approx(HALF_HEIGHT)
    assert center.start_angle == pytest.approx(-2 * math.pi / 3)
    assert center.sweep_delta == pytest.approx(math.pi / 3)
    assert center.end_angle == pytest.approx(-math.pi / 3)


def test_small_negative_sweep():
    center = chord_arc(large_arc=False, sweep=False).to_center()
    assert center.center.x == pytest.approx(5)
    assert center.center.y == pytest.approx(-HALF_HEIGHT)
    assert center.start_angle == pytest.approx(2 * math.pi / 3)
    assert center.sweep_delta == pytest.approx(-math.pi / 3)


def test_large_arcs():
    """The large arc flag picks the other centre and the long way round."""
    center = chord_arc(large_arc=True, sweep=False).to_center()
    assert center.center.y == pytest.approx(HALF_HEIGHT)
    assert center.sweep_delta == pytest.approx(-5 * math.pi / 3)

    center = chord_arc(large_arc=True, sweep=True).to_center()
    assert center.center.y == pytest.approx(-HALF_HEIGHT)
    assert center.sweep_delta == pytest.approx(5 * math.pi / 3)


def test_sweep_sign_follows_flag():
    for large_arc in (False, True):
        assert chord_arc(large_arc, True).to_center().sweep_delta > 0
        assert chord_arc(large_arc, False).to_center().sweep_delta < 0


def test_endpoints_recovered_on_tilted_ellipse():
    """The centre form passes through both original endpoints."""
    p1 = Point(0, 0)
    p2 = Point(4, 6)
    tilt = math.radians(30)
    radii = correct_radii(p1, p2, Point(5, 3), tilt)

    for large_arc in (False, True):
        for sweep in (False, True):
            center = EndpointArcParameterization(p1, p2, large_arc, sweep, radii, tilt).to_center()
            ellipse = Ellipse(center.center, radii.x, radii.y, tilt)
            assert ellipse.point_at(center.start_angle).is_close(p1, tolerance=1e-6)
            assert ellipse.point_at(center.end_angle).is_close(p2, tolerance=1e-6)


def test_center_equidistant_from_endpoints():
    """Every flag combination gives a centre one radius from both ends."""
    point1 = Point(1, 2)
    point2 = Point(7, -3)
    for large_arc in (False, True):
        for sweep in (False, True):
            center = EndpointArcParameterization(
                point1, point2, large_arc, sweep, Point(6, 6), 0.0
            ).to_center()
            to_start = center.center - point1
            to_end = center.center - point2
            assert math.hypot(to_start.x, to_start.y) == pytest.approx(6)
            assert math.hypot(to_end.x, to_end.y) == pytest.approx(6)


def test_degenerate_arcs():
    with pytest.raises(DegenerateArcError):
        chord_arc(False, True, radius=0).to_center()

    same = EndpointArcParameterization(Point(1, 1), Point(1, 1), False, True, Point(5, 5), 0.0)
    with pytest.raises(DegenerateArcError):
        same.to_center()

    # Radii too small and not corrected
    with pytest.raises(PathError):
        chord_arc(False, True, radius=1).to_center()


def test_correct_radii():
    assert correct_radii(Point(0, 0), Point(10, 0), Point(1, 1), 0.0).is_close(Point(5, 5))
    assert correct_radii(Point(0, 0), Point(10, 0), Point(10, 10), 0.0) == Point(10, 10)
    assert correct_radii(Point(0, 0), Point(10, 0), Point(-10, -20), 0.0) == Point(10, 20)
    assert correct_radii(Point(0, 0), Point(10, 0), Point(0, 3), 0.0) == Point(0, 3)


def test_corrected_radii_give_half_turn():
    """Radii scaled to just span the chord draw a half circle."""
    radii = correct_radii(Point(0, 0), Point(10, 0), Point(1, 1), 0.0)
    center = EndpointArcParameterization(
        Point(0, 0), Point(10, 0), False, True, radii, 0.0
    ).to_center()
    assert center.center.is_close(Point(5, 0), tolerance=1e-6)
    assert abs(center.sweep_delta) == pytest.approx(math.pi)


def test_split_sweep():
    assert split_sweep(0, math.pi / 3, math.pi / 2) == ((0, math.pi / 3),)

    pieces = split_sweep(0, math.pi, math.pi / 2)
    assert len(pieces) == 2
    assert pieces[0] == (0, math.pi / 2)
    assert pieces[1][1] == pytest.approx(math.pi)

    pieces = split_sweep(1, -3 * math.pi / 2, math.pi / 2)
    assert len(pieces) == 3
    assert pieces[-1][1] == pytest.approx(1 - 3 * math.pi / 2)


def main():
    """Main function."""
    test_small_positive_sweep()
    test_small_negative_sweep()
    test_large_arcs()
    test_sweep_sign_follows_flag()
    test_endpoints_recovered_on_tilted_ellipse()
    test_center_equidistant_from_endpoints()
    test_degenerate_arcs()
    test_correct_radii()
    test_corrected_radii_give_half_turn()
    test_split_sweep()
    logger.info("All arc tests passed")


if __name__ == "__main__":
    main()
