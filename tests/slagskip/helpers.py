from __future__ import annotations

from slagskip.core.models import Point
from slagskip.core.player import ActivePlayer, SetupPlayer
from slagskip.core.ships import Direction


def place_stacked_fleet(player: SetupPlayer) -> None:
    """Place every queued ship horizontally, one per row from the top."""
    for row, ship in enumerate(player.to_place):
        player.place_ship(ship, Point(0, row), Direction.HORIZONTAL)


def sink_all(player: ActivePlayer) -> None:
    for cell in player.grid.cells():
        if cell.occupied:
            player.fire_at(cell.point)
