"""Multiplayer grid-combat game engine."""

from slagskip.core import ActiveGame, Direction, GameStatus, NewGame, Point, Ship

__all__ = ["ActiveGame", "Direction", "GameStatus", "NewGame", "Point", "Ship"]
