from .dice import DiceBag, RandomSource
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
from .notation import parse_roll, parse_rolls
from .types import Roll, RollResults

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
