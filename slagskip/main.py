"""Application entry point: run one simulated game from environment settings."""

import logging

from slagskip.core.errors import SlagskipError
from slagskip.core.game import GameStatus
from slagskip.core.player import ActivePlayer
from slagskip.infra.config import load_default_env_files, load_settings
from slagskip.infra.logging import setup_logging, shutdown_logging
from slagskip.sim import play_random_game

logger = logging.getLogger(__name__)


def main() -> int:
    """Run a random game and return a process exit code."""
    loaded = load_default_env_files()
    setup_logging()
    try:
        if loaded:
            logger.info("env_loaded keys=%s", ",".join(sorted(loaded)))
        settings = load_settings()
        logger.info(
            "simulation_start grid_size=%d players=%s seed=%s",
            settings.grid_size,
            ",".join(settings.players),
            settings.seed,
        )
        try:
            report = play_random_game(settings)
        except SlagskipError as exc:
            logger.error("simulation_failed error=%s: %s", type(exc).__name__, exc)
            return 1
        for player in report.game.players:
            _log_final_grid(player)
        if report.result.status is GameStatus.WINNER and report.result.winner is not None:
            logger.info("%s won!", report.result.winner.name)
        elif report.result.status is GameStatus.DRAW:
            logger.info("Game ended in a draw.")
        return 0 if report.result.is_decided else 1
    finally:
        shutdown_logging()


def _log_final_grid(player: ActivePlayer) -> None:
    counts = player.ship_cell_counts()
    logger.info(
        "final_grid player=%s alive_cells=%d/%d\n%s",
        player.name,
        counts.alive,
        counts.total,
        player.grid,
    )


if __name__ == "__main__":
    raise SystemExit(main())
