"""
Structured logging for Zonesync.

Emits JSON log records carrying reconciliation context. Each
:meth:`ZonesyncLogger.cycle` call opens a :class:`CycleLogger` bound to a
provider and a single ``cycle_id``, so every record produced while
listing, planning and committing one change set can be grouped together.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

_CONTEXT_FIELDS = ("cycle_id", "provider", "zone", "change")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class CycleLogger:
    """Logger bound to one provider and one reconciliation cycle.

    Attributes:
        provider: DNS provider name attached to every record.
        cycle_id: Correlation ID shared by all records of the cycle.
    """

    def __init__(self, logger: logging.Logger, provider: str, cycle_id: str) -> None:
        self._logger = logger
        self.provider = provider
        self.cycle_id = cycle_id

    def _log(self, level: int, message: str, zone: str | None, change: str | None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = {
            "cycle_id": self.cycle_id,
            "provider": self.provider,
            "zone": zone,
            "change": change,
        }
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, *, zone: str | None = None, change: str | None = None) -> None:
        self._log(logging.DEBUG, message, zone, change)

    def info(self, message: str, *, zone: str | None = None, change: str | None = None) -> None:
        self._log(logging.INFO, message, zone, change)

    def error(self, message: str, *, zone: str | None = None, change: str | None = None) -> None:
        self._log(logging.ERROR, message, zone, change)


class ZonesyncLogger:
    """Owns the ``zonesync`` logger and hands out per-cycle loggers."""

    def __init__(self, name: str = "zonesync") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def cycle(self, provider: str, cycle_id: str | None = None) -> CycleLogger:
        """Start a cycle; *cycle_id* is generated when omitted."""
        return CycleLogger(self.logger, provider, cycle_id or uuid.uuid4().hex[:12])


# Module-level singleton
zs_logger = ZonesyncLogger()
