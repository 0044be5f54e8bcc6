"""Player lifecycle: fleet setup, then combat."""

from __future__ import annotations

import logging
import random

from slagskip.core.errors import NoPlacementAvailable, NotReady, PhaseConsumed
from slagskip.core.grid import Grid
from slagskip.core.models import CellCounts, Point, Shot
from slagskip.core.ships import Direction, Ship

logger = logging.getLogger(__name__)

DEFAULT_PLACEMENT_ATTEMPTS = 1_000


class SetupPlayer:
    """Player still placing ships; converted once by ``ready()``."""

    def __init__(self, name: str, grid_size: int, rng: random.Random | None = None) -> None:
        self.name = name
        self._grid: Grid | None = Grid(grid_size, rng=rng)

    def __repr__(self) -> str:
        state = "consumed" if self._grid is None else f"to_place={len(self._grid.to_place)}"
        return f"SetupPlayer(name={self.name!r}, {state})"

    @property
    def grid(self) -> Grid:
        if self._grid is None:
            raise PhaseConsumed(f"Player {self.name!r} has already left setup.")
        return self._grid

    @property
    def consumed(self) -> bool:
        """Whether ``ready()`` has already handed the grid on."""
        return self._grid is None

    @property
    def to_place(self) -> tuple[Ship, ...]:
        """Ships still waiting to be placed, in queue order."""
        return self.grid.to_place

    def place_ship(self, ship: Ship, point: Point, direction: Direction) -> None:
        self.grid.place_ship(ship, point, direction)

    def place_ships_randomly(self, max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS) -> None:
        """Place every queued ship at random legal positions.

        Each ship gets ``max_attempts`` random draws. If those all fail the
        ship is placed uniformly among every remaining legal position, and
        ``NoPlacementAvailable`` is raised when there is none.
        """
        grid = self.grid
        for ship in grid.to_place:
            if self._try_random_placement(grid, ship, max_attempts):
                continue
            candidates = _candidate_placements(grid, ship)
            if not candidates:
                raise NoPlacementAvailable(ship)
            origin, direction = grid.rng.choice(candidates)
            logger.debug("random_placement_fallback player=%s ship=%s", self.name, ship.value)
            grid.place_ship(ship, origin, direction)

    def is_ready(self) -> bool:
        return not self.grid.to_place

    def ready(self) -> ActivePlayer:
        """Hand the completed grid to an active player, consuming this one."""
        grid = self.grid
        if grid.to_place:
            unplaced = ", ".join(ship.label for ship in grid.to_place)
            raise NotReady(f"{self.name} still has ships to place: {unplaced}.", grid.to_place)
        self._grid = None
        logger.info("player_ready name=%s", self.name)
        return ActivePlayer(self.name, grid)

    @staticmethod
    def _try_random_placement(grid: Grid, ship: Ship, max_attempts: int) -> bool:
        for _ in range(max_attempts):
            origin = grid.random_point()
            direction = Direction.random(grid.rng)
            if grid.can_place(ship, origin, direction):
                grid.place_ship(ship, origin, direction)
                return True
        return False


class ActivePlayer:
    """Player in combat; the grid only accepts fire from here on."""

    def __init__(self, name: str, grid: Grid) -> None:
        if grid.to_place:
            raise NotReady(f"{name} still has ships to place.", grid.to_place)
        self.name = name
        self._grid = grid

    def __repr__(self) -> str:
        return f"ActivePlayer(name={self.name!r}, alive={self.is_alive()})"

    @property
    def grid(self) -> Grid:
        return self._grid

    def fire_at(self, point: Point) -> Shot:
        return self._grid.fire_at(point)

    def fire_at_random(self, max_attempts: int | None = None) -> tuple[Point, Shot] | None:
        """Fire at a random cell that has not been hit yet.

        Draws up to ``max_attempts`` random points (default: one per cell),
        then falls back to choosing among the remaining open cells. Returns
        None only when every cell has already been hit.
        """
        grid = self._grid
        attempts = grid.size * grid.size if max_attempts is None else max_attempts
        for _ in range(attempts):
            point = grid.random_point()
            if not grid.is_hit(point):
                return point, grid.fire_at(point)

        open_points = grid.open_points()
        if not open_points:
            return None
        point = grid.rng.choice(open_points)
        return point, grid.fire_at(point)

    def is_alive(self) -> bool:
        return self._grid.has_unhit_ships()

    def ship_cell_counts(self) -> CellCounts:
        return self._grid.ship_cell_counts()


def _candidate_placements(grid: Grid, ship: Ship) -> list[tuple[Point, Direction]]:
    candidates: list[tuple[Point, Direction]] = []
    for direction in (Direction.HORIZONTAL, Direction.VERTICAL):
        for y in range(grid.size):
            for x in range(grid.size):
                origin = Point(x, y)
                if grid.can_place(ship, origin, direction):
                    candidates.append((origin, direction))
    return candidates
