"""Logging setup for simulations: console narration plus an optional JSON-lines file."""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_FIELDS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    logger_levels: tuple[tuple[str, str], ...] = ()


def record_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the game context attached to a record through ``extra``."""
    return {key: value for key, value in vars(record).items() if key not in _RESERVED_FIELDS}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` context lands under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = record_fields(record)
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class TextFormatter(logging.Formatter):
    """Plain text with ``extra`` context appended to the first line as ``key=value``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        fields = record_fields(record)
        if not fields:
            return text
        context = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        # Grid dumps span several lines; keep the context next to the message.
        head, newline, tail = text.partition("\n")
        return f"{head} [{context}]{newline}{tail}"


_FORMATTERS: dict[str, type[logging.Formatter]] = {"text": TextFormatter, "json": JsonFormatter}


def configure_logging(config: LoggingConfig) -> None:
    """Install console logging, and stream through a queue listener when a file is set."""
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level(config.level_name))
    for name, level_name in config.logger_levels:
        logging.getLogger(name).setLevel(_level(level_name))

    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        root.addHandler(console)
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(
        log_queue, console, _json_file_handler(Path(config.file_path)), respect_handler_level=True
    )
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the file queue listener, if any."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def build_logging_config() -> LoggingConfig:
    """Resolve logging configuration from environment."""
    level_name = os.getenv("SLAGSKIP_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    console_format = os.getenv("LOG_FORMAT", "text").strip().lower()
    file_path = os.getenv("SLAGSKIP_LOG_FILE", "").strip() or None
    return LoggingConfig(
        level_name=level_name,
        console_format=console_format,
        file_path=file_path,
        logger_levels=_parse_logger_levels(os.getenv("SLAGSKIP_LOG_LEVELS", "")),
    )


def setup_logging() -> LoggingConfig:
    """Configure application logging from environment and return what was applied."""
    config = build_logging_config()
    configure_logging(config)
    logging.getLogger(__name__).debug(
        "logging_configured level=%s format=%s file=%s",
        config.level_name,
        config.console_format,
        config.file_path,
    )
    return config


def _parse_logger_levels(raw: str) -> tuple[tuple[str, str], ...]:
    """Parse ``slagskip.sim=DEBUG,slagskip.core.grid=WARNING``; malformed pairs are skipped."""
    levels: list[tuple[str, str]] = []
    for pair in raw.split(","):
        name, sep, level_name = pair.partition("=")
        name, level_name = name.strip(), level_name.strip().upper()
        if sep and name and level_name:
            levels.append((name, level_name))
    return tuple(levels)


def _level(level_name: str) -> int:
    return logging.getLevelNamesMapping().get(level_name.strip().upper(), logging.INFO)


def _formatter(kind: str) -> logging.Formatter:
    return _FORMATTERS.get(kind.strip().lower(), TextFormatter)()


def _json_file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(JsonFormatter())
    return handler
