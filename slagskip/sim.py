"""Automated random-versus-random games."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from slagskip.core.game import ActiveGame, GameResult, NewGame
from slagskip.core.models import Fire
from slagskip.infra.config import GameSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulationReport:
    """Final state of a simulated game."""

    game: ActiveGame
    result: GameResult
    rounds: int
    shots: int


def setup_random_game(settings: GameSettings, rng: random.Random) -> NewGame:
    """Register every configured player and place their fleets at random."""
    game = NewGame(settings.grid_size, rng=rng)
    for name in settings.players:
        player = game.add_player(name)
        player.place_ships_randomly(max_attempts=settings.placement_attempts)
        logger.debug("fleet_placed player=%s\n%s", name, player.grid)
    return game


def play_random_game(settings: GameSettings, rng: random.Random | None = None) -> SimulationReport:
    """Play one game where every player fires at random until it is decided.

    Each round, every player still alive when the round begins fires once at
    each listed opponent, so players can knock each other out in the same
    round and the game ends in a draw.
    """
    game = setup_random_game(settings, rng or random.Random(settings.seed)).start()
    rounds = 0
    shots = 0
    while not game.result().is_decided and rounds < settings.round_limit:
        rounds += 1
        shooters = game.alive_players()
        for turn in game.round():
            if turn.player not in shooters:
                continue
            for opponent in turn.opponents:
                fired = opponent.fire_at_random()
                if fired is None:
                    logger.warning("no_targets shooter=%s target=%s", turn.player.name, opponent.name)
                    continue
                point, shot = fired
                shots += 1
                level = logging.INFO if shot.fire is Fire.SUNK else logging.DEBUG
                logger.log(
                    level,
                    "%s fired at %s %s: %s",
                    turn.player.name,
                    opponent.name,
                    point,
                    shot.describe(),
                    extra={"round": rounds, "fire": shot.fire.value},
                )

    result = game.result()
    if result.is_decided:
        winner = result.winner.name if result.winner is not None else None
        logger.info("game_over status=%s winner=%s rounds=%d shots=%d", result.status.value, winner, rounds, shots)
    else:
        logger.warning("game_unfinished rounds=%d shots=%d", rounds, shots)
    return SimulationReport(game=game, result=result, rounds=rounds, shots=shots)
