from __future__ import annotations

import random

import pytest

from slagskip.core.game import ActiveGame, NewGame
from slagskip.core.models import Point
from slagskip.core.ships import Direction, Ship

from tests.slagskip.helpers import place_stacked_fleet


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def game_factory(seeded_rng: random.Random):
    def _make(names: tuple[str, ...] = ("Alice", "Bob"), grid_size: int = 10) -> ActiveGame:
        new_game = NewGame(grid_size, rng=seeded_rng)
        for name in names:
            place_stacked_fleet(new_game.add_player(name))
        return new_game.start()

    return _make


@pytest.fixture
def destroyer_duel() -> ActiveGame:
    """2x2 game: Alice covers (0,0)-(1,0), Bob covers (1,0)-(1,1)."""
    new_game = NewGame(2, rng=random.Random(7))
    alice = new_game.add_player("Alice")
    bob = new_game.add_player("Bob")
    alice.place_ship(Ship.DESTROYER, Point(0, 0), Direction.HORIZONTAL)
    bob.place_ship(Ship.DESTROYER, Point(1, 0), Direction.VERTICAL)
    return new_game.start()
