"""Logging pipeline: console/file handlers and a JSON record formatter."""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from armada.runtime.json_codec import dumps_text

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        }
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers; file output, when configured, is fed through a queue."""
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    level = logging.getLevelName(config.level_name.upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)

    console = logging.StreamHandler()
    console.setFormatter(_resolve_formatter(config.console_format))
    if not config.file_path:
        root.addHandler(console)
        return

    _QUEUE_LISTENER = QueueListener(
        _attach_queue(root), console, _file_handler(config), respect_handler_level=True
    )
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the queued listener, if any."""
    global _QUEUE_LISTENER

    listener, _QUEUE_LISTENER = _QUEUE_LISTENER, None
    if listener is None:
        return
    listener.stop()
    for handler in listener.handlers:
        handler.close()


def get_logger(name: str) -> logging.Logger:
    """Return namespaced logger instance."""
    return logging.getLogger(name)


def _attach_queue(root: logging.Logger) -> queue.SimpleQueue[logging.LogRecord]:
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    return records


def _file_handler(config: LoggingConfig) -> logging.Handler:
    path = Path(config.file_path or "")
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(_resolve_formatter(config.file_format))
    return handler


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


__all__ = [
    "JsonFormatter",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
]
