#!/usr/bin/env python3
"""Tests for the path sinks."""

import logging
import sys

import numpy as np
import pytest

from viewboxpath.geometry import Point
from viewboxpath.interpreter import draw
from viewboxpath.sinks import (
    CLOSE,
    CURVE,
    LINE,
    MOVE,
    DrawCall,
    PolylineSink,
    RecordingSink,
    SVGPathWriter,
    TransformingSink,
    format_number,
)

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("test_sinks")


def test_recording_sink():
    sink = RecordingSink()
    assert sink.current_point is None

    sink.move_to(Point(1, 1))
    sink.line_to(Point(2, 2))
    sink.curve_to(Point(5, 5), Point(3, 3), Point(4, 4))
    assert sink.current_point == Point(5, 5)
    assert sink.subpath_start == Point(1, 1)

    sink.close_subpath()
    assert sink.current_point == Point(1, 1)
    assert sink.ops() == [MOVE, LINE, CURVE, CLOSE]
    assert sink.calls[2] == DrawCall(CURVE, (Point(5, 5), Point(3, 3), Point(4, 4)))
    assert sink.calls[3] == DrawCall(CLOSE)


def test_transforming_sink():
    """The target sees transformed points; the cursor stays in path units."""
    target = RecordingSink()
    matrix = np.array([
        [2, 0, 1],
        [0, 2, 1],
        [0, 0, 1]
    ])
    sink = TransformingSink(target, matrix)

    sink.move_to(Point(1, 1))
    sink.curve_to(Point(4, 4), Point(2, 2), Point(3, 3))
    sink.close_subpath()

    assert target.calls[0].points == (Point(3, 3),)
    assert target.calls[1].points == (Point(9, 9), Point(5, 5), Point(7, 7))
    assert target.ops() == [MOVE, CURVE, CLOSE]
    assert sink.current_point == Point(1, 1)
    assert target.current_point == Point(3, 3)

    with pytest.raises(ValueError):
        TransformingSink(target, np.identity(2))


def test_format_number():
    assert format_number(10.0) == "10"
    assert format_number(2.5) == "2.5"
    assert format_number(1 / 3) == "0.333"
    assert format_number(-0.0001) == "0"
    assert format_number(-1.25) == "-1.25"
    assert format_number(2.6, precision=0) == "3"
    assert format_number(0.123456, precision=5) == "0.12346"


def test_svg_path_writer():
    writer = SVGPathWriter()
    draw("M0 0 L10 0 L10 10 Z", writer)
    logger.info(f"Written path data: {writer.path_data}")
    assert writer.path_data == "M0 0 L10 0 L10 10 Z"

    writer = SVGPathWriter()
    draw("M0 0 C1 2 3 4 5 6", writer)
    assert writer.path_data == "M0 0 C1 2 3 4 5 6"


def test_svg_path_writer_normalizes():
    """Relative and shorthand commands come out as absolute M, L, C, Z."""
    writer = SVGPathWriter(precision=2)
    draw("m1 1 h2 v2 q 0 3 3 3 z", writer)
    assert writer.path_data == "M1 1 L3 1 L3 3 C3 5 4 6 6 6 Z"


def test_polyline_sink():
    sink = PolylineSink()
    draw("M0 0 L10 0 L10 10 L0 10 Z", sink)
    assert sink.polylines == [[
        Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10), Point(0, 0)
    ]]
    assert sink.closed == [True]


def test_polyline_curves():
    sink = PolylineSink(curve_resolution=4)
    draw("M0 0 C0 10 10 10 10 0 M20 0 L30 0", sink)
    assert len(sink.polylines) == 2
    assert len(sink.polylines[0]) == 5
    assert sink.polylines[0][-1] == Point(10, 0)
    assert sink.polylines[1] == [Point(20, 0), Point(30, 0)]
    assert sink.closed == [False, False]


def test_polyline_moves():
    """Repeated moves collapse and lines without a move start at the origin."""
    sink = PolylineSink()
    sink.move_to(Point(1, 1))
    sink.move_to(Point(2, 2))
    sink.line_to(Point(3, 3))
    assert sink.polylines == [[Point(2, 2), Point(3, 3)]]

    sink = PolylineSink()
    sink.line_to(Point(3, 3))
    assert sink.polylines == [[Point(0, 0), Point(3, 3)]]

    sink = PolylineSink()
    sink.close_subpath()
    assert sink.polylines == []

    with pytest.raises(ValueError):
        PolylineSink(curve_resolution=0)


def test_polyline_after_close():
    """Drawing after a close starts a new polyline at the subpath start."""
    sink = PolylineSink()
    draw("M0 0 L10 0 Z l 0 5", sink)
    assert sink.closed == [True, False]
    assert sink.polylines[1] == [Point(0, 0), Point(0, 5)]


def main():
    """Main function."""
    test_recording_sink()
    test_transforming_sink()
    test_format_number()
    test_svg_path_writer()
    test_svg_path_writer_normalizes()
    test_polyline_sink()
    test_polyline_curves()
    test_polyline_moves()
    test_polyline_after_close()
    logger.info("All sink tests passed")


if __name__ == "__main__":
    main()
