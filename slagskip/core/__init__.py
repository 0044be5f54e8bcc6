"""Grid, player and game rules."""

from slagskip.core.errors import (
    NoPlacementAvailable,
    NotReady,
    OutOfBounds,
    Overlap,
    PhaseConsumed,
    PlacementError,
    SlagskipError,
    UnexpectedShip,
)
from slagskip.core.game import ActiveGame, GameResult, GameStatus, NewGame, Turn
from slagskip.core.grid import Grid
from slagskip.core.models import DEFAULT_GLYPHS, Cell, CellCounts, CellState, Fire, Point, Shot
from slagskip.core.player import ActivePlayer, SetupPlayer
from slagskip.core.ships import CATALOG, Direction, Ship, for_grid

__all__ = [
    "CATALOG",
    "DEFAULT_GLYPHS",
    "ActiveGame",
    "ActivePlayer",
    "Cell",
    "CellCounts",
    "CellState",
    "Direction",
    "Fire",
    "GameResult",
    "GameStatus",
    "Grid",
    "NewGame",
    "NoPlacementAvailable",
    "NotReady",
    "OutOfBounds",
    "Overlap",
    "PhaseConsumed",
    "PlacementError",
    "Point",
    "SetupPlayer",
    "Ship",
    "Shot",
    "SlagskipError",
    "Turn",
    "UnexpectedShip",
    "for_grid",
]
