"""Command-line interface for viewboxpath."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lxml import etree

from . import __version__
from .config import Config, load_config
from .errors import PathError
from .parser import parse_with_diagnostics
from .sinks import PolylineSink, RecordingSink, SVGPathWriter, format_number
from .svg import SVGDocument
from .viewbox import ViewboxPath

# Set up logging
logger = logging.getLogger(__name__)

FORMATS = ("svg", "calls", "commands", "polyline")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert SVG path data into move, line, cubic curve and close calls."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--path", "-p", help="SVG path data string"
    )
    source.add_argument(
        "--input", "-i", type=Path, help="Input SVG file path"
    )
    parser.add_argument(
        "--output", "-o", type=Path, help="Output file path (default: stdout)"
    )
    parser.add_argument(
        "--config", "-c", type=Path, help="Configuration YAML file path"
    )
    parser.add_argument(
        "--viewbox", nargs=4, type=float, metavar=("X", "Y", "W", "H"),
        help="Viewbox of the path data (overrides the document's viewBox)"
    )
    parser.add_argument(
        "--size", nargs=2, type=float, metavar=("W", "H"),
        help="Target size to scale the viewbox to"
    )
    parser.add_argument(
        "--format", "-f", choices=FORMATS, default="svg",
        help="Output format (default: svg)"
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides config)"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(args)


def setup_logging(config: Config) -> None:
    """Configure the root logger from the logging section of the config."""
    logging.basicConfig(
        level=str(config.get("logging.level", "INFO")).upper(),
        format=config.get("logging.format"),
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _points_text(points, precision: int) -> str:
    return " ".join(
        f"{format_number(p.x, precision)} {format_number(p.y, precision)}" for p in points
    )


def render_path(viewbox_path: ViewboxPath, output_format: str, config: Config,
                width: Optional[float] = None, height: Optional[float] = None) -> List[str]:
    """Render one path in the requested output format.

    Args:
        viewbox_path: Path to render
        output_format: One of FORMATS
        config: Configuration
        width: Target width (optional)
        height: Target height (optional)

    Returns:
        Output lines
    """
    precision = config.get("render.precision", 3)
    compact = config.get("parser.compact_arc_flags", True)

    if output_format == "commands":
        result = parse_with_diagnostics(viewbox_path.path_string, compact_arc_flags=compact)
        return [repr(command) for command in result.commands]

    if output_format == "svg":
        sink = SVGPathWriter(precision=precision)
    elif output_format == "calls":
        sink = RecordingSink()
    elif output_format == "polyline":
        sink = PolylineSink(curve_resolution=config.get("render.curve_resolution", 20))
    else:
        raise ValueError(f"Unknown output format: {output_format}")

    viewbox_path.render(
        sink, width, height,
        compact_arc_flags=compact,
        max_arc_span=config.max_arc_span,
    )

    if output_format == "svg":
        return [sink.path_data]
    if output_format == "calls":
        return [
            f"{call.op} {_points_text(call.points, precision)}".rstrip()
            for call in sink.calls
        ]
    return [
        _points_text(polyline, precision) + (" Z" if closed else "")
        for polyline, closed in zip(sink.polylines, sink.closed)
    ]


def load_paths(args, scaled: bool = False) -> List[ViewboxPath]:
    """Collect the paths named on the command line.

    Args:
        args: Parsed command line arguments
        scaled: Whether a target size was requested

    Returns:
        ViewboxPath objects to render
    """
    if args.path is not None:
        viewbox = args.viewbox
        if viewbox is None:
            if scaled:
                raise PathError("A target size needs --viewbox when using --path")
            # Unit viewbox; with no target size the coordinates stay untouched
            viewbox = (0.0, 0.0, 1.0, 1.0)
        return [ViewboxPath(viewbox, args.path)]

    document = SVGDocument(args.input)
    paths = document.to_viewbox_paths()
    if args.viewbox:
        for path in paths:
            path.viewbox = tuple(args.viewbox)
    return paths


def convert(args, config: Config) -> List[str]:
    """Run the conversion described by parsed arguments.

    Args:
        args: Parsed command line arguments
        config: Configuration

    Returns:
        Output lines
    """
    width = height = None
    if args.size:
        width, height = args.size
    elif config.get("render.width") or config.get("render.height"):
        width, height = config.get("render.width"), config.get("render.height")

    lines = []
    for viewbox_path in load_paths(args, scaled=width is not None or height is not None):
        lines.extend(render_path(viewbox_path, args.format, config, width, height))
    return lines


def main(argv=None):
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Validate input file
    if args.input and not args.input.exists():
        print(f"Error: Input file '{args.input}' does not exist.", file=sys.stderr)
        return 1

    # Validate config file if provided
    if args.config and not args.config.exists():
        print(f"Error: Config file '{args.config}' does not exist.", file=sys.stderr)
        return 1

    config = load_config(args.config)
    if args.log_level:
        config.set("logging.level", args.log_level)
    setup_logging(config)

    try:
        config.check()
        lines = convert(args, config)
    except (PathError, ValueError, OSError, etree.LxmlError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = "\n".join(lines) + "\n"
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
        logger.info(f"Wrote {len(lines)} lines to {args.output}")
    else:
        sys.stdout.write(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
