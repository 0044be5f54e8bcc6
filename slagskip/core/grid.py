"""Grid storage, placement validation and fire resolution."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

import numpy as np

from slagskip.core.errors import OutOfBounds, Overlap, UnexpectedShip
from slagskip.core.models import DEFAULT_GLYPHS, Cell, CellCounts, CellState, Fire, Point, Shot
from slagskip.core.ships import CATALOG, Direction, Ship, for_grid

logger = logging.getLogger(__name__)

# 0 marks an empty cell; ships are stored as catalog index + 1.
_EMPTY = 0
_SHIP_CODES: dict[Ship, int] = {ship: index + 1 for index, ship in enumerate(CATALOG)}


def _decode(code: int) -> Ship | None:
    if code == _EMPTY:
        return None
    return CATALOG[code - 1]


@dataclass(slots=True, eq=False)
class Grid:
    """Numpy-backed square grid owning its cells and placement queue."""

    size: int
    rng: random.Random | None = field(default=None, repr=False)
    ships: np.ndarray = field(init=False, repr=False)
    hits: np.ndarray = field(init=False, repr=False)
    _to_place: list[Ship] = field(init=False, repr=False)
    ship_remaining: dict[Ship, int] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.size}.")
        if self.rng is None:
            self.rng = random.Random()
        # Arrays are indexed [y, x] so rows iterate in display order.
        self.ships = np.zeros((self.size, self.size), dtype=np.int8)
        self.hits = np.zeros((self.size, self.size), dtype=np.bool_)
        self._to_place = list(for_grid(self.size))

    @property
    def to_place(self) -> tuple[Ship, ...]:
        """Ships still queued for placement; only ``place_ship`` shrinks the queue."""
        return tuple(self._to_place)

    def in_bounds(self, point: Point) -> bool:
        """Return whether the point lies on this grid."""
        return 0 <= point.x < self.size and 0 <= point.y < self.size

    def at(self, point: Point) -> Cell | None:
        """Return the cell at point, or None when out of bounds."""
        if not self.in_bounds(point):
            return None
        return self._cell(point)

    def cells_for(self, ship: Ship, origin: Point, direction: Direction) -> list[Point]:
        """Compute the points a placement would cover, without bounds checks."""
        dx, dy = direction.step
        return [origin.offset(i * dx, i * dy) for i in range(ship.length)]

    def validate_placement(self, ship: Ship, origin: Point, direction: Direction) -> list[Point]:
        """Check a placement against the queue, bounds and existing ships.

        Returns the covered points. Raises ``UnexpectedShip``, ``OutOfBounds``
        or ``Overlap`` on the first violation found; nothing is mutated.
        """
        if ship not in self._to_place:
            raise UnexpectedShip(ship)
        points = self.cells_for(ship, origin, direction)
        for point in points:
            if not self.in_bounds(point):
                raise OutOfBounds(point, ship)
            existing = _decode(int(self.ships[point.y, point.x]))
            if existing is not None:
                raise Overlap(ship, existing, point)
        return points

    def can_place(self, ship: Ship, origin: Point, direction: Direction) -> bool:
        try:
            self.validate_placement(ship, origin, direction)
        except (UnexpectedShip, OutOfBounds, Overlap):
            return False
        return True

    def place_ship(self, ship: Ship, origin: Point, direction: Direction) -> None:
        """Place a queued ship; the queue only shrinks once validation passes."""
        points = self.validate_placement(ship, origin, direction)
        code = _SHIP_CODES[ship]
        for point in points:
            self.ships[point.y, point.x] = code
        self.ship_remaining[ship] = len(points)
        self._to_place.remove(ship)
        logger.debug("ship_placed ship=%s origin=%s direction=%s", ship.value, origin, direction.value)

    def placed_ships(self) -> list[Ship]:
        """Return ships already on the grid, in catalog order."""
        return [ship for ship in CATALOG if ship in self.ship_remaining]

    def random_point(self) -> Point:
        """Draw a point uniformly from the grid."""
        return Point(self.rng.randrange(self.size), self.rng.randrange(self.size))

    def is_hit(self, point: Point) -> bool:
        if not self.in_bounds(point):
            raise OutOfBounds(point)
        return bool(self.hits[point.y, point.x])

    def fire_at(self, point: Point) -> Shot:
        """Resolve a shot; repeat shots are misses that change nothing."""
        if not self.in_bounds(point):
            raise OutOfBounds(point)
        if self.hits[point.y, point.x]:
            return Shot.miss()

        self.hits[point.y, point.x] = True
        ship = _decode(int(self.ships[point.y, point.x]))
        if ship is None:
            return Shot.miss()

        self.ship_remaining[ship] -= 1
        if self.ship_remaining[ship] == 0:
            return Shot(Fire.SUNK, ship)
        return Shot(Fire.HIT, ship)

    def is_sunk(self, ship: Ship) -> bool:
        """Return whether every cell of a placed ship has been hit."""
        return self.ship_remaining.get(ship) == 0

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order; each call starts a fresh pass."""
        for y in range(self.size):
            for x in range(self.size):
                yield self._cell(Point(x, y))

    def open_points(self) -> list[Point]:
        """Return points that have not been fired at, row-major."""
        ys, xs = np.nonzero(~self.hits)
        return [Point(int(x), int(y)) for y, x in zip(ys, xs)]

    def ship_cell_counts(self) -> CellCounts:
        occupied = self.ships != _EMPTY
        total = int(np.count_nonzero(occupied))
        alive = int(np.count_nonzero(occupied & ~self.hits))
        return CellCounts(total=total, alive=alive)

    def has_unhit_ships(self) -> bool:
        return bool(np.any((self.ships != _EMPTY) & ~self.hits))

    def render(self, glyphs: Mapping[CellState, str] = DEFAULT_GLYPHS) -> str:
        """Render one character per cell, one line per row."""
        rows = []
        for y in range(self.size):
            rows.append("".join(glyphs[self._cell(Point(x, y)).state] for x in range(self.size)))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.render()

    def _cell(self, point: Point) -> Cell:
        return Cell(
            point=point,
            ship=_decode(int(self.ships[point.y, point.x])),
            hit=bool(self.hits[point.y, point.x]),
        )
