import logging
from datetime import datetime
from pathlib import Path

import orjson

from armada.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from armada.runtime.json_codec import dumps_bytes, dumps_text


def test_dumps_text_falls_back_to_str_for_unknown_types() -> None:
    text = dumps_text({"path": Path("a/b"), "n": 1})
    assert orjson.loads(text) == {"path": str(Path("a/b")), "n": 1}


def test_dumps_bytes_options() -> None:
    assert dumps_bytes({"b": 1, "a": 2}, sort_keys=True) == b'{"a":2,"b":1}'
    assert b"\n" in dumps_bytes({"a": 1}, pretty=True)
    assert orjson.loads(dumps_bytes({"at": datetime(2024, 1, 2)}))["at"].startswith("2024-01-02")


def test_recoverable_errors_are_bounded() -> None:
    assert ValueError in RECOVERABLE_RUNTIME_ERRORS
    assert KeyboardInterrupt not in RECOVERABLE_RUNTIME_ERRORS


def test_log_recoverable_attaches_traceback(caplog) -> None:
    logger = logging.getLogger("test.recoverable")
    with caplog.at_level(logging.WARNING, logger="test.recoverable"):
        try:
            raise LookupError("missing")
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(logger, "lookup_failed key=%s", "x")
    record = caplog.records[-1]
    assert record.getMessage() == "lookup_failed key=x"
    assert record.levelno == logging.WARNING
    assert record.exc_info is not None
