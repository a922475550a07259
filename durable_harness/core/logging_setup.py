"""Structured logging for harness runs.

Updates:
    v0.1.0 - 2026-10-19 - JSON log records carrying call and orchestration fields.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import IO, Any

_configured = False
_handler: logging.Handler | None = None

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Formatter emitting one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        created = datetime.fromtimestamp(record.created, timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=repr)


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields a caller attached to ``record`` via ``extra=``.

    Args:
        record (logging.LogRecord): Record produced by a harness logger.

    Returns:
        dict[str, Any]: Caller-supplied fields, private names excluded.
    """

    return {
        key: value
        for key, value in record.__dict__.items()
        if not key.startswith("_") and key not in _RECORD_ATTRIBUTES
    }


def configure_logging(
    config: dict[str, Any] | None = None, *, stream: IO[str] | None = None
) -> None:
    """Install the JSON handler on the root logger once per process.

    Args:
        config (dict[str, Any] | None): The ``logging`` section of the harness
            settings. Only ``level`` is read.
        stream (IO[str] | None): Destination for records, stderr by default.
    """

    global _configured, _handler
    if _configured:
        return

    level_name = str((config or {}).get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    _handler = handler
    _configured = True


def set_runtime_level(level_name: str) -> None:
    """Change the active log level after configuration.

    Args:
        level_name (str): Level name such as ``DEBUG`` or ``WARNING``.

    Raises:
        ValueError: If ``level_name`` is not a logging level.
    """

    if not level_name:
        return
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    logging.getLogger().setLevel(level)
    if _handler:
        _handler.setLevel(level)
