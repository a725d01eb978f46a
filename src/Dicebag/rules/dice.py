# rules/dice.py

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

import structlog

from Dicebag.metrics import inc_counter, observe_histogram

from .types import Roll, RollResults

if TYPE_CHECKING:
    from Dicebag.config import Settings

_COUNT_BUCKETS = [1, 2, 5, 10, 20, 50, 100]


class RandomSource(Protocol):
    """Anything that can pick an index in ``[0, stop)``; ``random.Random`` fits."""

    def randrange(self, stop: int) -> int:
        ...


class DiceBag:
    """A rolling session bound to one randomness source.

    The bag does not validate the Rolls it is given. It expects what the
    parser produces (``len(values) == sides``, a legal shape); a hand-built Roll
    with fewer values than sides fails with ``IndexError``.

    Not safe to share across threads; use one bag per worker.
    """

    def __init__(self, rng: RandomSource | None = None, *, seed: int | None = None):
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        self._log = structlog.get_logger()

    @classmethod
    def from_settings(cls, settings: Settings) -> DiceBag:
        return cls(seed=settings.dice_seed)

    def roll(self, roll: Roll) -> list[int]:
        """Roll every die in ``roll`` and return the face values in draw order."""
        faces = roll.values
        out = [faces[self._rng.randrange(roll.sides)] for _ in range(roll.dice_count)]
        inc_counter("dice.rolled", roll.dice_count)
        self._log.debug("dice.roll.result", roll=str(roll), values=out)
        return out

    def roll_all(self, rolls: Iterable[Roll]) -> RollResults:
        """Roll each of ``rolls`` in order and summarise every individual die.

        ``lowest`` and ``highest`` come from the observed values; both are None
        when nothing was rolled.
        """
        total = 0
        lowest: int | None = None
        highest: int | None = None
        values: list[int] = []
        for r in rolls:
            for v in self.roll(r):
                total += v
                if lowest is None or v < lowest:
                    lowest = v
                if highest is None or v > highest:
                    highest = v
                values.append(v)
        observe_histogram("dice.roll.count", len(values), buckets=_COUNT_BUCKETS)
        return RollResults(total=total, lowest=lowest, highest=highest, values=tuple(values))
