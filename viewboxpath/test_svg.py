#!/usr/bin/env python3
"""Test script for the SVG document reader.

This script checks transform parsing, viewBox handling and path
extraction from small in-memory and on-disk documents.
"""

import logging
import sys
import tempfile
from pathlib import Path

import pytest

from viewboxpath.sinks import SVGPathWriter
from viewboxpath.svg import SVGDocument, parse_dimension, parse_svg, parse_transform

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("test_svg")

GROUPED_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 20 10">
  <g transform="translate(10 0)">
    <path id="inner" transform="scale(2)" d="M1 1 L2 2"/>
  </g>
  <path id="plain" d="M0 0 H20"/>
  <path id="empty" d=""/>
</svg>
"""


def apply(matrix, x, y):
    return (
        matrix[0][0] * x + matrix[0][1] * y + matrix[0][2],
        matrix[1][0] * x + matrix[1][1] * y + matrix[1][2],
    )


def test_parse_transform():
    matrix = parse_transform("translate(10 20) scale(2)")
    assert apply(matrix, 1, 1) == (12, 22)

    matrix = parse_transform("matrix(1 0 0 1 5 6)")
    assert apply(matrix, 0, 0) == (5, 6)

    matrix = parse_transform("rotate(90)")
    x, y = apply(matrix, 1, 0)
    assert x == pytest.approx(0, abs=1e-12)
    assert y == pytest.approx(1)

    matrix = parse_transform("rotate(180, 5, 5)")
    x, y = apply(matrix, 0, 0)
    assert (x, y) == (pytest.approx(10), pytest.approx(10))

    matrix = parse_transform("scale(3)")
    assert apply(matrix, 1, 2) == (3, 6)

    assert parse_transform("") is None
    assert parse_transform("   ") is None


def test_malformed_transform_ignored():
    matrix = parse_transform("matrix(1 2) translate(1)")
    assert apply(matrix, 0, 0) == (1, 0)


def test_parse_dimension():
    assert parse_dimension("100px") == 100
    assert parse_dimension("10mm") == 10
    assert parse_dimension("50%") == 50
    assert parse_dimension(" 12.5 ") == 12.5
    assert parse_dimension("") == 0
    assert parse_dimension(None) == 0
    assert parse_dimension("wide") == 0


def test_document_from_string():
    document = SVGDocument.from_string(GROUPED_SVG)
    assert document.viewbox == (0, 0, 20, 10)
    assert document.width == 200
    assert document.height == 100

    paths = document.paths
    assert [path.element_id for path in paths] == ["inner", "plain", "empty"]

    # Group transform outside, path transform inside
    assert apply(paths[0].transform_matrix, 1, 1) == (12, 2)
    assert apply(paths[1].transform_matrix, 1, 1) == (1, 1)


def test_to_viewbox_paths():
    """Empty paths are skipped; transforms and viewBox carry over."""
    document = SVGDocument.from_string(GROUPED_SVG)
    viewbox_paths = document.to_viewbox_paths()
    assert len(viewbox_paths) == 2
    assert viewbox_paths[0].viewbox == (0, 0, 20, 10)

    writer = SVGPathWriter()
    viewbox_paths[0].render(writer, 200, 100)
    assert writer.path_data == "M120 20 L140 40"


def test_size_fallback():
    """Without a viewBox the width and height are used."""
    document = SVGDocument.from_string(
        '<svg xmlns="http://www.w3.org/2000/svg" width="30mm" height="40mm">'
        '<path d="M0 0"/></svg>'
    )
    assert document.viewbox == (0, 0, 30, 40)

    document = SVGDocument.from_string(
        '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0"/></svg>'
    )
    with pytest.raises(ValueError):
        document.to_viewbox_paths()


def test_parse_svg_file():
    with tempfile.TemporaryDirectory() as temp_dir:
        svg_path = Path(temp_dir) / "test.svg"
        svg_path.write_text(GROUPED_SVG)

        document = parse_svg(svg_path)
        logger.info(f"Parsed {len(document.paths)} paths from {svg_path}")
        assert len(document.paths) == 3
        assert document.file_path == svg_path


def main():
    """Main function."""
    test_parse_transform()
    test_malformed_transform_ignored()
    test_parse_dimension()
    test_document_from_string()
    test_to_viewbox_paths()
    test_size_fallback()
    test_parse_svg_file()
    logger.info("All SVG tests passed")


if __name__ == "__main__":
    main()
