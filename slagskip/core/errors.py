"""Recoverable errors raised by grid, player and game operations."""

from __future__ import annotations

from collections.abc import Iterable

from slagskip.core.models import Point
from slagskip.core.ships import Ship


class SlagskipError(Exception):
    """Base class for all game rule violations."""


class PlacementError(SlagskipError, ValueError):
    """A ship could not be placed; the grid is unchanged."""


class OutOfBounds(PlacementError):
    """A coordinate lies outside the grid."""

    def __init__(self, point: Point, ship: Ship | None = None) -> None:
        self.point = point
        self.ship = ship
        if ship is None:
            super().__init__(f"{point} is out of bounds")
        else:
            super().__init__(f"{ship.label} is out of bounds at {point}")


class Overlap(PlacementError):
    """A placement collides with a ship already on the grid."""

    def __init__(self, ship: Ship, existing: Ship, point: Point) -> None:
        self.ship = ship
        self.existing = existing
        self.point = point
        super().__init__(f"{ship.label} overlaps with {existing.label} at {point}")


class UnexpectedShip(PlacementError):
    """The ship is not waiting in the placement queue."""

    def __init__(self, ship: Ship) -> None:
        self.ship = ship
        super().__init__(f"{ship.label} is not waiting to be placed")


class NoPlacementAvailable(PlacementError):
    """No legal position is left for the ship."""

    def __init__(self, ship: Ship) -> None:
        self.ship = ship
        super().__init__(f"No room left to place {ship.label}")


class NotReady(SlagskipError):
    """Readiness prerequisites are unmet."""

    def __init__(self, message: str, unplaced: Iterable[Ship] = ()) -> None:
        self.unplaced = tuple(unplaced)
        super().__init__(message)


class PhaseConsumed(SlagskipError):
    """A setup-phase value was used after converting it to its active form."""
