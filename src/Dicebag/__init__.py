"""Dice notation parsing and rolling."""

from Dicebag.rules import (
    CustomDieSyntaxError,
    DiceBag,
    ImpossibleDie,
    InvalidDiceCount,
    InvalidDieValue,
    InvalidDigit,
    InvalidRoll,
    InvalidSides,
    ParseRollError,
    RandomSource,
    Roll,
    RollResults,
    parse_roll,
    parse_rolls,
)

__all__ = [
    "DiceBag",
    "RandomSource",
    "Roll",
    "RollResults",
    "parse_roll",
    "parse_rolls",
    "ParseRollError",
    "InvalidRoll",
    "InvalidDiceCount",
    "InvalidSides",
    "ImpossibleDie",
    "CustomDieSyntaxError",
    "InvalidDigit",
    "InvalidDieValue",
]
