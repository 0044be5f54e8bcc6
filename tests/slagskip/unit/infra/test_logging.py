import json
import logging

from slagskip.infra.logging import (
    JsonFormatter,
    LoggingConfig,
    TextFormatter,
    build_logging_config,
    configure_logging,
    setup_logging,
    shutdown_logging,
)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"custom": 1},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"custom": 1}


def test_build_logging_config_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("SLAGSKIP_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    monkeypatch.setenv("SLAGSKIP_LOG_FILE", str(tmp_path / "run.jsonl"))
    config = build_logging_config()
    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_path == str(tmp_path / "run.jsonl")

    monkeypatch.setenv("SLAGSKIP_LOG_LEVEL", "warning")
    monkeypatch.delenv("SLAGSKIP_LOG_FILE")
    config = build_logging_config()
    assert config.level_name == "WARNING"
    assert config.file_path is None


def test_configure_logging_console_only(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "text")
    monkeypatch.delenv("SLAGSKIP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SLAGSKIP_LOG_FILE", raising=False)
    configure_logging(build_logging_config())
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1


def test_setup_logging_writes_json_file(monkeypatch, tmp_path) -> None:
    log_file = tmp_path / "logs" / "run.jsonl"
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("SLAGSKIP_LOG_LEVEL", raising=False)
    monkeypatch.setenv("SLAGSKIP_LOG_FILE", str(log_file))
    setup_logging()

    logging.getLogger("test.logging.file").info("hello", extra={"round": 3})
    shutdown_logging()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    messages = [json.loads(line) for line in lines]
    assert any(m["msg"] == "hello" and m["fields"]["round"] == 3 for m in messages)


def test_text_formatter_appends_context_to_first_line() -> None:
    logger = logging.getLogger("test.text.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="final_grid player=%s\n%s",
        args=("Alice", "XO\n_."),
        exc_info=None,
        extra={"round": 4, "fire": "SUNK"},
    )
    lines = TextFormatter().format(record).splitlines()
    assert lines[0].endswith("final_grid player=Alice [fire=SUNK round=4]")
    assert lines[1:] == ["XO", "_."]


def test_text_formatter_without_context_is_unchanged() -> None:
    logger = logging.getLogger("test.text.plain")
    record = logger.makeRecord(logger.name, logging.WARNING, __file__, 1, "plain", (), None)
    assert TextFormatter().format(record).endswith("WARNING test.text.plain: plain")


def test_logger_levels_are_parsed_and_applied(monkeypatch) -> None:
    monkeypatch.delenv("SLAGSKIP_LOG_FILE", raising=False)
    monkeypatch.setenv("SLAGSKIP_LOG_LEVELS", "test.levels.quiet=warning, broken, =DEBUG,test.levels.loud=DEBUG")
    config = build_logging_config()
    assert config.logger_levels == (("test.levels.quiet", "WARNING"), ("test.levels.loud", "DEBUG"))

    configure_logging(config)
    assert logging.getLogger("test.levels.quiet").level == logging.WARNING
    assert logging.getLogger("test.levels.loud").level == logging.DEBUG


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging(LoggingConfig(level_name="chatty"))
    assert logging.getLogger().level == logging.INFO
