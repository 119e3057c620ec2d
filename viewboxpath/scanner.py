"""Numeric scanning for path data.

Commas and whitespace are interchangeable separators. Scanning stops at the
first character that cannot start a number.
"""

import re
from typing import Iterator, List, Tuple

# Optional sign, digits with an optional single decimal point, optional exponent
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
SEPARATOR_RE = re.compile(r"[\s,]*")
# A lone flag digit; "1.0" or "1e0" is a number, not a flag followed by more text
FLAG_RE = re.compile(r"[01](?![.eE])")

# Positions of the large-arc and sweep flags within an arc argument group
ARC_FLAG_POSITIONS = (3, 4)
ARC_ARITY = 7


class NumberScanner:
    """Lazy, restartable sequence of the numbers at the start of a string.

    Every call to iter() starts a fresh scan from the beginning of the text.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[float]:
        for value, _ in self._scan():
            yield value

    def _scan(self) -> Iterator[Tuple[float, int]]:
        pos = SEPARATOR_RE.match(self.text, 0).end()
        while pos < len(self.text):
            match = NUMBER_RE.match(self.text, pos)
            if not match:
                return
            pos = SEPARATOR_RE.match(self.text, match.end()).end()
            yield float(match.group()), pos

    def scan(self) -> Tuple[List[float], str]:
        """Scan the text once.

        Returns:
            Tuple of (scanned numbers, unconsumed text stripped of separators)
        """
        numbers = []
        end = SEPARATOR_RE.match(self.text, 0).end()
        for value, end in self._scan():
            numbers.append(value)
        return numbers, self.text[end:].strip(" \t\r\n,")

    def remainder(self) -> str:
        """Return the unconsumed text, stripped of separators."""
        return self.scan()[1]


def scan_numbers(text: str) -> List[float]:
    """Scan all leading numbers of a string.

    Args:
        text: Text to scan

    Returns:
        List of scanned numbers
    """
    return list(NumberScanner(text))


def scan_arc_arguments(text: str) -> Tuple[List[float], str]:
    """Scan elliptical arc arguments, reading flags as single digits.

    Flags may be written without separators (``a1 1 0 11 5 5``), so the
    flag positions of each group of seven first try a single ``0`` or ``1``
    character. Anything else at a flag position (``2``, ``1.0``) is read as
    a regular number and left for the command builder to judge.

    Args:
        text: Numeric run following an ``A`` or ``a`` command letter

    Returns:
        Tuple of (scanned numbers, unconsumed remainder)
    """
    numbers = []
    pos = SEPARATOR_RE.match(text, 0).end()
    while pos < len(text):
        match = None
        if len(numbers) % ARC_ARITY in ARC_FLAG_POSITIONS:
            match = FLAG_RE.match(text, pos)
        if not match:
            match = NUMBER_RE.match(text, pos)
        if not match:
            break
        numbers.append(float(match.group()))
        pos = SEPARATOR_RE.match(text, match.end()).end()

    return numbers, text[pos:].strip(" \t\r\n,")
