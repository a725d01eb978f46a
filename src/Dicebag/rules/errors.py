"""Parse failures for dice notation.

Every failure is a subclass of :class:`ParseRollError` so callers can catch the
whole family or match a single kind. Payloads (the offending token, character
or side count) are kept as attributes rather than folded into the message.
"""

from __future__ import annotations


class ParseRollError(ValueError):
    """Base exception for dice notation errors."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidRoll(ParseRollError):
    """Token does not look like ``[count]d<sides>`` at all."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"not a dice roll: {token!r}")


class InvalidDiceCount(ParseRollError):
    """Dice count present but not a positive integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid dice count: {text!r}")


class InvalidSides(ParseRollError):
    """Numeric sides could not be read as an integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid number of sides: {text!r}")


class ImpossibleDie(ParseRollError):
    """Resolved die shape is not allowed (fewer than two faces, or three)."""

    def __init__(self, sides: int):
        self.sides = sides
        super().__init__(f"impossible die with {sides} sides")


class CustomDieSyntaxError(ParseRollError):
    """Custom die is not wrapped in ``{`` ... ``}``."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"custom die must be written as {{v1,v2,...}}: {text!r}")


class InvalidDigit(ParseRollError):
    """A custom die value starts with something other than a digit or ``-``."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"unexpected character {char!r} at start of die value")


class InvalidDieValue(ParseRollError):
    """A custom die value contains a character that cannot belong to it."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"unexpected character {char!r} in die value")


__all__ = [
    "ParseRollError",
    "InvalidRoll",
    "InvalidDiceCount",
    "InvalidSides",
    "ImpossibleDie",
    "CustomDieSyntaxError",
    "InvalidDigit",
    "InvalidDieValue",
]
