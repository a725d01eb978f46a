from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Roll:
    """One parsed dice specification, e.g. ``3d6``.

    ``values[i]`` is the number printed on face ``i + 1``. The parser guarantees
    ``len(values) == sides``; constructing a Roll by hand makes that the
    caller's job.
    """

    dice_count: int
    sides: int
    values: tuple[int, ...]

    @classmethod
    def normal(cls, dice_count: int, sides: int) -> Roll:
        return cls(dice_count=dice_count, sides=sides, values=tuple(range(1, sides + 1)))

    def __str__(self) -> str:
        # Lossy for fudge/percentile/custom dice: only the face count survives.
        return f"{self.dice_count}d{self.sides}"


@dataclass(frozen=True)
class RollResults:
    total: int
    lowest: int | None
    highest: int | None
    values: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "lowest": self.lowest,
            "highest": self.highest,
            "values": list(self.values),
        }
