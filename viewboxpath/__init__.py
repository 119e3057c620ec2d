"""viewboxpath: interpret SVG path data as move, line, cubic curve and close calls."""

__version__ = "0.1.0"

from .commands import PathCommand
from .errors import DegenerateArcError, DiagnosticKind, ParseDiagnostic, PathError
from .geometry import Ellipse, Point
from .interpreter import draw, interpret
from .parser import parse, parse_with_diagnostics, tokenize
from .sinks import PathSink, PolylineSink, RecordingSink, SVGPathWriter, TransformingSink
from .viewbox import ViewboxPath, viewbox_transform

__all__ = [
    "DegenerateArcError",
    "DiagnosticKind",
    "Ellipse",
    "ParseDiagnostic",
    "PathCommand",
    "PathError",
    "PathSink",
    "Point",
    "PolylineSink",
    "RecordingSink",
    "SVGPathWriter",
    "TransformingSink",
    "ViewboxPath",
    "draw",
    "interpret",
    "parse",
    "parse_with_diagnostics",
    "tokenize",
    "viewbox_transform",
]
