import logging
import sys

import orjson
import pytest

from armada.game.infra.logging import JsonFormatter, build_logging_config, setup_logging
from armada.runtime.logging import configure_logging, shutdown_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    shutdown_logging()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)


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
    payload = orjson.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.json.formatter"
    assert payload["fields"]["custom"] == 1


def test_json_formatter_serializes_exceptions() -> None:
    logger = logging.getLogger("test.json.exc")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logger.makeRecord(
            logger.name, logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )
    payload = orjson.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]


def test_build_logging_config_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("ARMADA_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("ARMADA_LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    config = build_logging_config()
    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_format == "json"
    assert config.file_path is not None
    assert config.file_path.endswith(".jsonl")


def test_log_level_falls_back_to_generic_variable(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("ARMADA_LOG_DIR", str(tmp_path))
    monkeypatch.delenv("ARMADA_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert build_logging_config().level_name == "ERROR"


def test_configure_logging_sets_root_level(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("ARMADA_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("ARMADA_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "text")
    configure_logging(build_logging_config())
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers


def test_setup_logging_writes_run_file(monkeypatch, tmp_path) -> None:
    log_dir = tmp_path / "appdata" / "logs"
    monkeypatch.setenv("ARMADA_LOG_DIR", str(log_dir))
    monkeypatch.setenv("ARMADA_LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_FORMAT", "text")
    setup_logging()

    logging.getLogger("test.logging.file").info("hello")
    shutdown_logging()

    files = list(log_dir.glob("armada_run_*.jsonl"))
    assert files
    lines = files[0].read_text(encoding="utf-8").splitlines()
    messages = [orjson.loads(line)["msg"] for line in lines]
    assert "hello" in messages
