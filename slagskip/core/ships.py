"""Ship catalog and placement directions."""

from __future__ import annotations

import random
from enum import StrEnum


class Ship(StrEnum):
    """Classic fleet, declared in catalog order."""

    CARRIER = "CARRIER"
    BATTLESHIP = "BATTLESHIP"
    CRUISER = "CRUISER"
    SUBMARINE = "SUBMARINE"
    DESTROYER = "DESTROYER"

    @property
    def length(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


SHIP_LENGTHS: dict[Ship, int] = {
    Ship.CARRIER: 5,
    Ship.BATTLESHIP: 4,
    Ship.CRUISER: 3,
    Ship.SUBMARINE: 3,
    Ship.DESTROYER: 2,
}

CATALOG: tuple[Ship, ...] = tuple(Ship)


def for_grid(size: int) -> tuple[Ship, ...]:
    """Return catalog ships that fit on a grid of the given size."""
    return tuple(ship for ship in CATALOG if ship.length <= size)


class Direction(StrEnum):
    """Placement axis."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def step(self) -> tuple[int, int]:
        """Unit (dx, dy) vector along this axis."""
        if self is Direction.HORIZONTAL:
            return 1, 0
        return 0, 1

    @classmethod
    def random(cls, rng: random.Random) -> Direction:
        return rng.choice((cls.HORIZONTAL, cls.VERTICAL))
