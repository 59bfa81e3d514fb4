"""JSON log records for the effect center and its handlers.

Every record is one JSON object per line. Dispatch records carry the
effect's id, kind and caller so a single effect can be followed from the
center into the handler that received it.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

CENTER_LOGGER_NAME = "effectcenter.center"

# Effect fields, emitted first and in this order when present
EFFECT_FIELDS = ("effect_id", "effect_kind", "caller", "handler")

# Attributes every LogRecord has; anything else came in through extra=
_BUILTIN_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.makeLogRecord({})).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line stamped with UTC time."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name)) for name in EFFECT_FIELDS if hasattr(record, name)
        )
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _BUILTIN_RECORD_ATTRS and key not in payload
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        try:
            return json.dumps(payload, default=str)
        except (TypeError, ValueError):
            return str(payload)


def _has_json_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers)


def _attach_json_output(logger: logging.Logger, level: int) -> logging.Logger:
    # Idempotent: other handlers (e.g. test capture) do not count as ours
    if not _has_json_handler(logger):
        stream = logging.StreamHandler()
        stream.setFormatter(JSONFormatter())
        logger.addHandler(stream)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def configure_center_logger(level: int = logging.WARNING) -> logging.Logger:
    """Return the ``effectcenter.center`` logger writing JSON to stderr.

    The center only emits DEBUG records, so the WARNING default keeps it
    silent. Pass ``logging.DEBUG`` to trace dispatch and registration.
    """
    return _attach_json_output(logging.getLogger(CENTER_LOGGER_NAME), level)


def get_logger(name: str = "effectcenter", level: int = logging.INFO) -> logging.Logger:
    """Return a named logger writing JSON to stderr, set to ``level``."""
    return _attach_json_output(logging.getLogger(name), level)


def effect_extra(effect: Any, handler: Any = None) -> dict[str, Any]:
    """Return the standard ``extra`` fields describing an effect dispatch."""
    extra: dict[str, Any] = {
        "effect_id": effect.id,
        "effect_kind": effect.kind,
        "caller": effect.caller,
    }
    if handler is not None:
        extra["handler"] = handler.name
    return extra
