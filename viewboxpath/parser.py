"""Path data parsing.

Turns an SVG path string into an ordered list of PathCommand values in two
stages: the tokenizer splits the string into one token per command letter,
and the builder converts each token's numbers into commands, applying the
implicit repetition rule of the path grammar.

Parsing is total. A malformed token contributes no commands and parsing
continues with the next token; the problem is reported as a diagnostic.
"""

import logging
import re
from typing import List, NamedTuple, Optional

from .commands import COMMAND_LETTERS, COMMANDS_BY_LETTER, ClosePath, PathCommand
from .errors import DiagnosticKind, ParseDiagnostic
from .scanner import ARC_FLAG_POSITIONS, NumberScanner, scan_arc_arguments

# Set up logging
logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(f"([{COMMAND_LETTERS}])([^{COMMAND_LETTERS}]*)")

# Letters whose numbers are read as (x, y) pairs
PAIR_COMMANDS = {letter: COMMANDS_BY_LETTER[letter] for letter in "MmLl"}

# Letters taking one number per command
SINGLE_COMMANDS = {letter: COMMANDS_BY_LETTER[letter] for letter in "HhVv"}

# Absolute curves: the run must hold exactly one group
FIXED_COMMANDS = {
    letter: (COMMANDS_BY_LETTER[letter], arity)
    for letter, arity in (("C", 6), ("S", 4), ("Q", 4), ("T", 2))
}

# Relative curves and arcs: the run is chunked into repeated groups
CHUNKED_COMMANDS = {
    letter: (COMMANDS_BY_LETTER[letter], arity)
    for letter, arity in (("c", 6), ("s", 4), ("q", 4), ("t", 2), ("A", 7), ("a", 7))
}

ARC_LETTERS = "Aa"


class Token(NamedTuple):
    """One command letter and the numeric text that follows it."""

    letter: str
    numbers_text: str
    offset: int


class ParseResult(NamedTuple):
    """Commands parsed from a path string plus per-token diagnostics."""

    commands: List[PathCommand]
    diagnostics: List[ParseDiagnostic]


def tokenize(path_data: str) -> List[Token]:
    """Split path data into command tokens.

    Adjacent letters such as ``zM`` become separate tokens, every letter but
    the last having an empty numeric run.

    Args:
        path_data: SVG path data string

    Returns:
        Tokens in source order
    """
    return [
        Token(match.group(1), match.group(2), match.start())
        for match in TOKEN_RE.finditer(path_data)
    ]


def _arity_problem(letter: str, count: int) -> Optional[str]:
    """Describe why a token's numbers cannot be used, or None if they can."""
    if letter in "Zz":
        return None
    if letter in PAIR_COMMANDS:
        if count == 0:
            return "expected coordinate pairs, got no numbers"
        if count % 2:
            return f"odd number of coordinates ({count}), last one dropped"
        return None
    if letter in SINGLE_COMMANDS:
        return "expected at least one number" if count == 0 else None
    if letter in FIXED_COMMANDS:
        _, arity = FIXED_COMMANDS[letter]
        if count != arity:
            return f"expected exactly {arity} numbers, got {count}"
        return None
    if letter in CHUNKED_COMMANDS:
        _, arity = CHUNKED_COMMANDS[letter]
        if count == 0 or count % arity:
            return f"expected a multiple of {arity} numbers, got {count}"
        return None
    return f"unknown command letter {letter!r}"


def _make_arc(cls, group: List[float]) -> PathCommand:
    rx, ry, tilt, large_arc, sweep, x, y = group
    # Flags are true only when written as 1
    return cls(rx, ry, tilt, large_arc == 1, sweep == 1, x, y)


def build_commands(letter: str, numbers: List[float]) -> List[PathCommand]:
    """Convert one command letter and its numbers into path commands.

    Args:
        letter: Command letter (case sensitive)
        numbers: Numbers following the letter

    Returns:
        Commands for this token; empty when the numbers do not fit the
        command's arity or the letter is unknown
    """
    if letter in "Zz":
        return [ClosePath()]

    if letter in PAIR_COMMANDS:
        cls = PAIR_COMMANDS[letter]
        return [cls(numbers[i], numbers[i + 1]) for i in range(0, len(numbers) - 1, 2)]

    if letter in SINGLE_COMMANDS:
        cls = SINGLE_COMMANDS[letter]
        return [cls(value) for value in numbers]

    if letter in FIXED_COMMANDS:
        cls, arity = FIXED_COMMANDS[letter]
        if len(numbers) != arity:
            return []
        return [cls(*numbers)]

    if letter in CHUNKED_COMMANDS:
        cls, arity = CHUNKED_COMMANDS[letter]
        if len(numbers) % arity:
            return []
        groups = [numbers[i:i + arity] for i in range(0, len(numbers), arity)]
        if letter in ARC_LETTERS:
            return [_make_arc(cls, group) for group in groups]
        return [cls(*group) for group in groups]

    return []


def _scan_token(token: Token, compact_arc_flags: bool):
    if compact_arc_flags and token.letter in ARC_LETTERS:
        return scan_arc_arguments(token.numbers_text)
    return NumberScanner(token.numbers_text).scan()


def _parse(path_data: str, compact_arc_flags: bool) -> ParseResult:
    commands = []
    diagnostics = []

    leading = TOKEN_RE.split(path_data, maxsplit=1)[0].strip(" \t\r\n,")
    if leading:
        diagnostics.append(ParseDiagnostic(
            DiagnosticKind.TOKENIZATION_GAP, None, 0,
            f"text before the first command ignored: {leading!r}"
        ))

    for token in tokenize(path_data):
        numbers, remainder = _scan_token(token, compact_arc_flags)

        if remainder and token.letter not in "Zz":
            diagnostics.append(ParseDiagnostic(
                DiagnosticKind.TOKENIZATION_GAP, token.letter, token.offset,
                f"unreadable text ignored: {remainder!r}"
            ))

        problem = _arity_problem(token.letter, len(numbers))
        if problem:
            diagnostics.append(ParseDiagnostic(
                DiagnosticKind.ARITY_MISMATCH, token.letter, token.offset, problem
            ))

        built = build_commands(token.letter, numbers)
        if token.letter in ARC_LETTERS:
            for i in range(0, len(numbers) if built else 0, 7):
                for position in ARC_FLAG_POSITIONS:
                    value = numbers[i + position]
                    if value not in (0, 1):
                        diagnostics.append(ParseDiagnostic(
                            DiagnosticKind.FLAG_VALUE, token.letter, token.offset,
                            f"arc flag {value:g} is neither 0 nor 1, read as false"
                        ))
        commands.extend(built)

    return ParseResult(commands, diagnostics)


def parse(path_data: str, compact_arc_flags: bool = True) -> List[PathCommand]:
    """Parse SVG path data into commands.

    Args:
        path_data: SVG path data string
        compact_arc_flags: Read arc flags as single digits so that
            flags written without separators are understood

    Returns:
        Ordered list of path commands
    """
    if not path_data:
        return []
    return _parse(path_data, compact_arc_flags).commands


def parse_with_diagnostics(path_data: str, compact_arc_flags: bool = True) -> ParseResult:
    """Parse SVG path data, reporting problems instead of hiding them.

    Every diagnostic is also logged as a warning.

    Args:
        path_data: SVG path data string
        compact_arc_flags: Read arc flags as single digits

    Returns:
        ParseResult with commands and diagnostics
    """
    if not path_data:
        return ParseResult([], [])

    result = _parse(path_data, compact_arc_flags)
    for diagnostic in result.diagnostics:
        logger.warning(f"Path data: {diagnostic}")

    logger.debug(f"Parsed {len(result.commands)} commands from {len(path_data)} characters")
    return result
