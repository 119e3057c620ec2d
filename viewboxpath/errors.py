"""Exceptions and parse diagnostics for viewboxpath.

Parsing never raises: problems found while reading path data are collected
as ParseDiagnostic records and logged. Geometry problems raise
DegenerateArcError, which the interpreter turns into a diagnostic.
"""

from enum import Enum
from typing import NamedTuple, Optional


class PathError(Exception):
    """Base class for viewboxpath errors."""


class DegenerateArcError(PathError, ValueError):
    """Raised when an arc cannot be converted to centre form."""


class ConfigError(PathError):
    """Raised for invalid configuration values."""


class DiagnosticKind(Enum):
    """Categories of recoverable problems found in path data."""

    TOKENIZATION_GAP = "tokenization_gap"
    ARITY_MISMATCH = "arity_mismatch"
    FLAG_VALUE = "flag_value"
    DEGENERATE_GEOMETRY = "degenerate_geometry"


class ParseDiagnostic(NamedTuple):
    """A recoverable problem tied to one command token.

    Attributes:
        kind: Diagnostic category
        letter: Command letter of the token (None for text outside any token)
        offset: Character offset of the token in the path string (-1 if unknown)
        message: Human readable description
    """

    kind: DiagnosticKind
    letter: Optional[str]
    offset: int
    message: str

    def __str__(self) -> str:
        where = f"'{self.letter}' at {self.offset}" if self.letter else f"offset {self.offset}"
        return f"{self.kind.value} ({where}): {self.message}"
