"""Game orchestration: player registration, rounds and result detection."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import StrEnum

from slagskip.core.errors import NotReady, PhaseConsumed
from slagskip.core.player import ActivePlayer, SetupPlayer

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2


class GameStatus(StrEnum):
    """Overall game outcome."""

    UNDECIDED = "UNDECIDED"
    WINNER = "WINNER"
    DRAW = "DRAW"


@dataclass(frozen=True, slots=True)
class GameResult:
    """Result of an active game at the moment it was queried."""

    status: GameStatus
    winner: ActivePlayer | None = None

    @property
    def is_decided(self) -> bool:
        return self.status is not GameStatus.UNDECIDED


@dataclass(frozen=True, slots=True)
class Turn:
    """One player paired with every opponent alive when the round was built."""

    player: ActivePlayer
    opponents: tuple[ActivePlayer, ...]


class NewGame:
    """Game accepting player registrations until ``start()``."""

    def __init__(self, grid_size: int, rng: random.Random | None = None) -> None:
        if grid_size < 1:
            raise ValueError(f"Grid size must be positive, got {grid_size}.")
        self.grid_size = grid_size
        self._rng = rng or random.Random()
        self._players: list[SetupPlayer] | None = []

    @property
    def players(self) -> tuple[SetupPlayer, ...]:
        return tuple(self._require_players())

    def add_player(self, name: str) -> SetupPlayer:
        """Register a player and return it so the caller can place ships."""
        players = self._require_players()
        # Each player samples from its own stream so placement order cannot skew targeting.
        player = SetupPlayer(name, self.grid_size, rng=random.Random(self._rng.getrandbits(64)))
        players.append(player)
        logger.debug("player_added name=%s grid_size=%d", name, self.grid_size)
        return player

    def ready_count(self) -> int:
        """Count players that ``start()`` would convert."""
        return sum(1 for player in self._require_players() if _startable(player))

    def is_ready(self) -> bool:
        return self.ready_count() >= MIN_PLAYERS

    def start(self) -> ActiveGame:
        """Convert ready players into an active game, dropping the rest."""
        players = self._require_players()
        ready = self.ready_count()
        if ready < MIN_PLAYERS:
            raise NotReady(f"Not enough players are ready to start ({ready} of {MIN_PLAYERS}).")

        active: list[ActivePlayer] = []
        for player in players:
            if _startable(player):
                active.append(player.ready())
            elif player.consumed:
                # Readied through its own handle; the game never saw the active player.
                logger.info("player_dropped name=%s reason=already_ready", player.name)
            else:
                logger.info(
                    "player_dropped name=%s unplaced=%s",
                    player.name,
                    ",".join(ship.value for ship in player.to_place),
                )
        self._players = None
        logger.info("game_started players=%d grid_size=%d", len(active), self.grid_size)
        return ActiveGame(self.grid_size, active)

    def _require_players(self) -> list[SetupPlayer]:
        if self._players is None:
            raise PhaseConsumed("Game has already started.")
        return self._players


def _startable(player: SetupPlayer) -> bool:
    return not player.consumed and player.is_ready()


class ActiveGame:
    """Game in combat between players who finished setup."""

    def __init__(self, grid_size: int, players: list[ActivePlayer]) -> None:
        self.grid_size = grid_size
        self._players = tuple(players)

    @property
    def players(self) -> tuple[ActivePlayer, ...]:
        return self._players

    def alive_players(self) -> list[ActivePlayer]:
        return [player for player in self._players if player.is_alive()]

    def round(self) -> list[Turn]:
        """Build one turn per player against the opponents alive right now."""
        alive = self.alive_players()
        return [
            Turn(player=player, opponents=tuple(p for p in alive if p is not player))
            for player in self._players
        ]

    def result(self) -> GameResult:
        alive = self.alive_players()
        if len(alive) == 1:
            return GameResult(GameStatus.WINNER, alive[0])
        if not alive:
            return GameResult(GameStatus.DRAW)
        return GameResult(GameStatus.UNDECIDED)
