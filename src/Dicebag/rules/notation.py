# rules/notation.py
"""Dice notation parser.

Supports:
  NdS        numeric die, faces 1..S (``3d6``, ``d20``)
  NdF        fudge die, faces +1 +1 0 0 -1 -1 (``F`` or ``f``)
  Nd%        percentile die, faces 1..100
  Nd{a,b,..} custom die, faces listed literally (whitespace allowed inside)

The count N is optional and defaults to 1.
"""

from __future__ import annotations

import re

import structlog

from Dicebag.metrics import inc_counter

from .errors import (
    CustomDieSyntaxError,
    ImpossibleDie,
    InvalidDiceCount,
    InvalidDieValue,
    InvalidDigit,
    InvalidRoll,
    InvalidSides,
    ParseRollError,
)
from .types import Roll

log = structlog.get_logger()

_ROLL_RE = re.compile(r"^(?P<count>[0-9]*)d(?P<sides>\{.*|[0-9]+|[Ff]|%)$", re.DOTALL)

FUDGE_FACES: tuple[int, ...] = (1, 1, 0, 0, -1, -1)
PERCENTILE_FACES: tuple[int, ...] = tuple(range(1, 101))

# Shape rule: at least two faces, and never three.
MIN_SIDES = 2
IMPOSSIBLE_SIDES = frozenset({3})


def check_shape(sides: int) -> None:
    if sides < MIN_SIDES or sides in IMPOSSIBLE_SIDES:
        raise ImpossibleDie(sides)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _read_value(text: str, pos: int) -> tuple[int, int]:
    """Read one signed integer starting at ``pos``; return (value, next_pos)."""
    if pos >= len(text):
        raise CustomDieSyntaxError(text)
    start = pos
    ch = text[pos]
    if ch == "-":
        pos += 1
    elif not _is_digit(ch):
        raise InvalidDigit(ch)
    digits_start = pos
    while pos < len(text) and _is_digit(text[pos]):
        pos += 1
    if pos == digits_start:
        # a lone "-"
        if pos >= len(text):
            raise CustomDieSyntaxError(text)
        raise InvalidDieValue(text[pos])
    try:
        value = int(text[start:pos])
    except ValueError as exc:
        # longer than the interpreter's int conversion limit
        raise InvalidDieValue(text[start]) from exc
    return value, pos


def parse_custom_die(text: str) -> tuple[int, ...]:
    """Scan a ``{v1, v2, ...}`` face list into a tuple of face values.

    An empty list is accepted here; the shape check rejects it afterwards.

    Raises:
        CustomDieSyntaxError: missing opening brace, missing closing brace,
            or text after the closing brace.
        InvalidDigit: a value starts with neither a digit nor ``-``.
        InvalidDieValue: a value is followed by anything but whitespace,
            ``,`` or ``}``, or has too many digits to convert.
    """
    if not text.startswith("{"):
        raise CustomDieSyntaxError(text)
    values: list[int] = []
    pos = _skip_ws(text, 1)
    if pos < len(text) and text[pos] == "}":
        if pos + 1 != len(text):
            raise CustomDieSyntaxError(text)
        return ()
    while True:
        pos = _skip_ws(text, pos)
        value, pos = _read_value(text, pos)
        values.append(value)
        pos = _skip_ws(text, pos)
        if pos >= len(text):
            raise CustomDieSyntaxError(text)
        ch = text[pos]
        if ch == ",":
            pos += 1
            continue
        if ch == "}":
            break
        raise InvalidDieValue(ch)
    if pos + 1 != len(text):
        raise CustomDieSyntaxError(text)
    return tuple(values)


def _normal_die(text: str) -> tuple[int, ...]:
    if not (text.isascii() and text.isdigit()):
        raise InvalidSides(text)
    try:
        sides = int(text)
    except ValueError as exc:
        raise InvalidSides(text) from exc
    return tuple(range(1, sides + 1))


def build_die(sides_spec: str) -> tuple[int, ...]:
    """Return the face-value table for the part of a roll after ``d``."""
    if sides_spec.startswith("{"):
        return parse_custom_die(sides_spec)
    if sides_spec in ("F", "f"):
        return FUDGE_FACES
    if sides_spec == "%":
        return PERCENTILE_FACES
    return _normal_die(sides_spec)


def _parse_dice_count(text: str) -> int:
    if not text:
        return 1
    if not (text.isascii() and text.isdigit()):
        raise InvalidDiceCount(text)
    try:
        count = int(text)
    except ValueError as exc:
        raise InvalidDiceCount(text) from exc
    if count < 1:
        raise InvalidDiceCount(text)
    return count


def _parse_roll(token: str) -> Roll:
    m = _ROLL_RE.match(token)
    if not m:
        raise InvalidRoll(token)
    count = _parse_dice_count(m.group("count"))
    values = build_die(m.group("sides"))
    check_shape(len(values))
    return Roll(dice_count=count, sides=len(values), values=values)


def parse_roll(token: str) -> Roll:
    """Parse a single notation token such as ``2d6`` or ``d{1, 2, 2, 3}``.

    Raises:
        ParseRollError: one of its subclasses, describing the first problem found.
    """
    token = token.strip()
    try:
        roll = _parse_roll(token)
    except ParseRollError as exc:
        inc_counter("dice.parse.failed")
        log.debug("dice.parse.failed", token=token, kind=exc.kind, error=str(exc))
        raise
    inc_counter("dice.parse.ok")
    return roll


def split_tokens(notation: str) -> list[str]:
    """Split on whitespace, except inside ``{...}``; drop empty tokens."""
    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in notation:
        if ch.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
        current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


def parse_rolls(notation: str) -> list[Roll]:
    """Parse every token in ``notation``; the first bad token aborts the batch."""
    return [parse_roll(token) for token in split_tokens(notation)]
