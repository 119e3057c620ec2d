#!/usr/bin/env python3
"""Integration test for viewboxpath.

This script tests the end-to-end conversion of SVG documents into
normalized path data and polylines.
"""

import logging
import re
import sys
import tempfile
from pathlib import Path

from viewboxpath.cli import main as cli_main
from viewboxpath.config import load_config
from viewboxpath.sinks import PolylineSink, SVGPathWriter
from viewboxpath.svg import parse_svg

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger(__name__)

SVG_DIR = Path(__file__).parent / "svg"

# Expected number of non-empty paths per sample
SAMPLES = {
    "bold.svg": 1,
    "shapes.svg": 3,
}

NORMALIZED_RE = re.compile(r"^[MLCZ0-9 .\-]*$")


def test_sample_documents():
    """Every sample converts cleanly at a fixed height."""
    config = load_config()

    for name, expected_paths in SAMPLES.items():
        svg_file = SVG_DIR / name
        assert svg_file.exists(), f"Test file not found: {svg_file}"

        document = parse_svg(svg_file)
        paths = document.to_viewbox_paths()
        assert len(paths) == expected_paths

        for viewbox_path in paths:
            width, height = viewbox_path.size_for_height(100)

            writer = SVGPathWriter(precision=config.get("render.precision"))
            diagnostics = viewbox_path.render(writer, width, height)
            logger.info(f"{name}: {writer.path_data[:60]}...")
            assert diagnostics == []
            assert writer.path_data.startswith("M")
            assert NORMALIZED_RE.match(writer.path_data)

            polylines = PolylineSink(curve_resolution=config.get("render.curve_resolution"))
            viewbox_path.render(polylines, width, height)
            assert polylines.polylines


def test_bold_glyph_bounds():
    """The glyph stays close to its viewbox once scaled."""
    viewbox_path = parse_svg(SVG_DIR / "bold.svg").to_viewbox_paths()[0]
    width, height = viewbox_path.size_for_height(100)
    assert (width, height) == (75, 100)

    sink = PolylineSink()
    viewbox_path.render(sink, width, height)
    assert sink.closed == [True, True, True]
    for polyline in sink.polylines:
        for point in polyline:
            # Curves may bulge slightly past the viewbox edge
            assert -1 <= point.x <= width + 1
            assert -1 <= point.y <= height + 1


def test_cli_conversion():
    """Convert each sample through the command-line entry point."""
    with tempfile.TemporaryDirectory() as temp_dir:
        for name, expected_paths in SAMPLES.items():
            output_file = Path(temp_dir) / f"{Path(name).stem}.txt"
            logger.info(f"Converting {name} to {output_file}")

            code = cli_main([
                "--input", str(SVG_DIR / name),
                "--output", str(output_file),
                "--format", "polyline",
            ])
            assert code == 0
            assert output_file.exists()
            logger.info(f"Output file size: {output_file.stat().st_size} bytes")
            assert len(output_file.read_text().splitlines()) >= expected_paths


def main():
    """Run integration test."""
    test_sample_documents()
    test_bold_glyph_bounds()
    test_cli_conversion()
    logger.info("Integration test passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
