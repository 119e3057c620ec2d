"""SVG document reading for viewboxpath.

This module reads SVG files, extracting the viewBox and the data of every
path element together with the transforms of its ancestor groups, so each
path can be turned into a ViewboxPath.
"""

import logging
import math
import re
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
from lxml import etree

from .scanner import scan_numbers
from .viewbox import ViewboxPath

# Set up logging
logger = logging.getLogger(__name__)

# SVG namespace
SVG_NS = "{http://www.w3.org/2000/svg}"

TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")


def parse_transform(transform_str: str) -> Optional[np.ndarray]:
    """Parse an SVG transform attribute into a transformation matrix.

    Lists such as ``translate(10 20) scale(2)`` are composed left to right.

    Args:
        transform_str: SVG transform string

    Returns:
        3x3 transformation matrix as numpy array, or None for an empty string
    """
    if not transform_str or not transform_str.strip():
        return None

    matrix = np.identity(3)
    for name, args in TRANSFORM_RE.findall(transform_str):
        values = scan_numbers(args)
        step = _transform_matrix(name, values)
        if step is None:
            logger.warning(f"Ignoring malformed transform: {name}({args})")
            continue
        matrix = np.dot(matrix, step)

    return matrix


def _transform_matrix(name: str, values: List[float]) -> Optional[np.ndarray]:
    if name == "matrix":
        if len(values) != 6:
            return None
        a, b, c, d, e, f = values
        return np.array([
            [a, c, e],
            [b, d, f],
            [0, 0, 1]
        ], dtype=float)

    if not values:
        return None

    if name == "translate":
        tx = values[0]
        ty = values[1] if len(values) > 1 else 0
        return np.array([
            [1, 0, tx],
            [0, 1, ty],
            [0, 0, 1]
        ], dtype=float)

    if name == "scale":
        sx = values[0]
        sy = values[1] if len(values) > 1 else sx
        return np.array([
            [sx, 0, 0],
            [0, sy, 0],
            [0, 0, 1]
        ], dtype=float)

    if name == "rotate":
        angle_rad = math.radians(values[0])
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        rotation = np.array([
            [cos_a, -sin_a, 0],
            [sin_a, cos_a, 0],
            [0, 0, 1]
        ], dtype=float)
        if len(values) >= 3:
            # Rotation around point (cx, cy)
            cx, cy = values[1], values[2]
            t1 = np.array([[1, 0, cx], [0, 1, cy], [0, 0, 1]], dtype=float)
            t2 = np.array([[1, 0, -cx], [0, 1, -cy], [0, 0, 1]], dtype=float)
            return np.dot(np.dot(t1, rotation), t2)
        return rotation

    if name == "skewX":
        return np.array([
            [1, math.tan(math.radians(values[0])), 0],
            [0, 1, 0],
            [0, 0, 1]
        ], dtype=float)

    if name == "skewY":
        return np.array([
            [1, 0, 0],
            [math.tan(math.radians(values[0])), 1, 0],
            [0, 0, 1]
        ], dtype=float)

    return None


def parse_dimension(value: Optional[str]) -> float:
    """Parse a dimension value with optional units.

    Args:
        value: Dimension string (e.g., "100px", "10mm")

    Returns:
        Parsed value as float, units ignored
    """
    if not value:
        return 0.0

    value = value.strip()
    for unit in ["px", "pt", "mm", "cm", "in", "%"]:
        if value.endswith(unit):
            value = value[:-len(unit)]
            break

    try:
        return float(value)
    except ValueError:
        logger.warning(f"Could not parse dimension: {value}")
        return 0.0


class SVGPath:
    """An SVG path element with its data and accumulated transform."""

    def __init__(self, path_element):
        """Initialize from an SVG path element.

        Args:
            path_element: lxml Element for the path
        """
        self.element = path_element
        self.path_data = path_element.get("d", "")
        self.transform_matrix = np.identity(3)
        self.element_id = path_element.get("id")

    def add_transform(self, transform_str: str) -> None:
        """Append a transform, applied inside the ones already added.

        Args:
            transform_str: SVG transform string
        """
        matrix = parse_transform(transform_str)
        if matrix is not None:
            self.transform_matrix = np.dot(self.transform_matrix, matrix)


class SVGDocument:
    """A parsed SVG document."""

    def __init__(self, file_path: Union[str, Path, None] = None, root=None):
        """Initialize SVG document from a file or a parsed root element.

        Args:
            file_path: Path to SVG file
            root: Already parsed lxml root element (used by from_string)
        """
        self.file_path = Path(file_path) if file_path is not None else None
        self.root = root
        self.width = 0.0
        self.height = 0.0
        self.viewbox = (0.0, 0.0, 0.0, 0.0)
        self.paths: List[SVGPath] = []

        self._parse()

    @classmethod
    def from_string(cls, text: Union[str, bytes]) -> "SVGDocument":
        """Parse an SVG document held in memory."""
        if isinstance(text, str):
            text = text.encode("utf-8")
        return cls(root=etree.fromstring(text))

    def _parse(self):
        """Parse the document and extract its properties."""
        try:
            if self.root is None:
                self.root = etree.parse(str(self.file_path)).getroot()

            self.width = parse_dimension(self.root.get("width"))
            self.height = parse_dimension(self.root.get("height"))

            viewbox = self.root.get("viewBox")
            numbers = scan_numbers(viewbox) if viewbox else []
            if len(numbers) == 4:
                self.viewbox = tuple(numbers)
            else:
                if viewbox:
                    logger.warning(f"Ignoring malformed viewBox: {viewbox!r}")
                self.viewbox = (0.0, 0.0, self.width, self.height)

            self._extract_paths()

        except Exception as e:
            logger.error(f"Error parsing SVG document {self.file_path or '<string>'}: {e}")
            raise

    def _extract_paths(self):
        """Extract all path elements with their transform chains."""
        for path_elem in self.root.iter(f"{SVG_NS}path", "path"):
            path = SVGPath(path_elem)

            # Collect transforms from the path up to the root
            transform_chain = []
            node = path_elem
            while node is not None and node is not self.root:
                if node.get("transform"):
                    transform_chain.append(node.get("transform"))
                node = node.getparent()

            # Outermost first
            for transform in reversed(transform_chain):
                path.add_transform(transform)

            self.paths.append(path)

        logger.info(f"Extracted {len(self.paths)} paths from SVG")

    def to_viewbox_paths(self) -> List[ViewboxPath]:
        """Convert every non-empty path into a ViewboxPath.

        Returns:
            ViewboxPath objects sharing the document's viewBox
        """
        if self.viewbox[2] <= 0 or self.viewbox[3] <= 0:
            raise ValueError(f"SVG document has no usable viewBox or size: {self.viewbox}")

        return [
            ViewboxPath(self.viewbox, path.path_data, path.transform_matrix)
            for path in self.paths
            if path.path_data.strip()
        ]


def parse_svg(file_path: Union[str, Path]) -> SVGDocument:
    """Parse an SVG file and return the document object.

    Args:
        file_path: Path to SVG file

    Returns:
        SVGDocument object
    """
    return SVGDocument(file_path)
