"""Value types shared by grid, player and game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from slagskip.core.ships import Ship


@dataclass(frozen=True, slots=True)
class Point:
    """Grid coordinate; x runs along a row, y down the columns."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Point:
        return Point(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class CellState(StrEnum):
    """Four visible states of a single cell."""

    SHIP = "SHIP"
    HIT = "HIT"
    WATER = "WATER"
    MISS = "MISS"


DEFAULT_GLYPHS: dict[CellState, str] = {
    CellState.SHIP: "O",
    CellState.HIT: "X",
    CellState.WATER: ".",
    CellState.MISS: "_",
}


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only snapshot of one grid coordinate."""

    point: Point
    ship: Ship | None = None
    hit: bool = False

    @property
    def occupied(self) -> bool:
        return self.ship is not None

    @property
    def state(self) -> CellState:
        if self.ship is not None:
            return CellState.HIT if self.hit else CellState.SHIP
        return CellState.MISS if self.hit else CellState.WATER


class Fire(StrEnum):
    """Result kind of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"


@dataclass(frozen=True, slots=True)
class Shot:
    """Outcome of firing at one coordinate."""

    fire: Fire
    ship: Ship | None = None

    @classmethod
    def miss(cls) -> Shot:
        return cls(Fire.MISS)

    @property
    def is_hit(self) -> bool:
        return self.fire is not Fire.MISS

    def describe(self) -> str:
        if self.fire is Fire.SUNK and self.ship is not None:
            return f"sunk {self.ship.label}"
        if self.fire is Fire.HIT:
            return "hit"
        return "miss"


@dataclass(frozen=True, slots=True)
class CellCounts:
    """Occupied cells on a grid versus those still unhit."""

    total: int
    alive: int

    @property
    def hit(self) -> int:
        return self.total - self.alive
