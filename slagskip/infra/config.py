"""Env-file loading and game settings."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from slagskip.core.player import DEFAULT_PLACEMENT_ATTEMPTS

DEFAULT_GRID_SIZE = 10
DEFAULT_PLAYERS: tuple[str, ...] = ("Alice", "Bob")


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Immutable settings for one simulated game."""

    grid_size: int = DEFAULT_GRID_SIZE
    players: tuple[str, ...] = DEFAULT_PLAYERS
    seed: int | None = None
    max_rounds: int | None = None
    placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS

    @property
    def round_limit(self) -> int:
        """Rounds before a simulation gives up; every round fires at least one shot per opponent."""
        if self.max_rounds is not None:
            return self.max_rounds
        return self.grid_size * self.grid_size + 1


def load_settings() -> GameSettings:
    """Resolve game settings from ``SLAGSKIP_*`` environment variables."""
    grid_size = _int("SLAGSKIP_GRID_SIZE", DEFAULT_GRID_SIZE)
    if grid_size < 1:
        grid_size = DEFAULT_GRID_SIZE
    players = _csv("SLAGSKIP_PLAYERS") or DEFAULT_PLAYERS
    return GameSettings(
        grid_size=grid_size,
        players=players,
        seed=_optional_int("SLAGSKIP_SEED"),
        max_rounds=_optional_int("SLAGSKIP_MAX_ROUNDS"),
        placement_attempts=max(1, _int("SLAGSKIP_PLACEMENT_ATTEMPTS", DEFAULT_PLACEMENT_ATTEMPTS)),
    )


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Split one ``KEY=VALUE`` line; blanks, comments and lines without ``=`` give None.

    A leading ``export`` is accepted so shell-sourced files load unchanged, and
    one pair of matching quotes around the value is stripped.
    """
    line = line.strip()
    if line.startswith("export "):
        line = line.removeprefix("export ").lstrip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key or key.startswith("#"):
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        value = value[1:-1]
    return key, value


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> dict[str, str]:
    """Apply an env file to ``os.environ`` and return the values actually applied."""
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    applied: dict[str, str] = {}
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = parse_env_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if override_existing or key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> dict[str, str]:
    """Load ``.env`` then ``.env.local``; later files win."""
    applied: dict[str, str] = {}
    for path in paths if paths is not None else (".env", ".env.local"):
        applied.update(load_env_file(path, override_existing=override_existing))
    return applied


def _int(name: str, default: int) -> int:
    value = _optional_int(name)
    return default if value is None else value


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _csv(name: str) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return ()
    values = [part.strip() for part in raw.split(",")]
    return tuple(value for value in values if value)
