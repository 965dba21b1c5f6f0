from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

from notekeep_core.errors import ConfigError

if TYPE_CHECKING:
    from notekeep_core.config import LoggingConfig

_PLAIN_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "where": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class _NotekeepHandler(logging.StreamHandler):
    """Marks the handler installed by setup_logging so it can be reconfigured."""


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ConfigError(f"Unknown log level: {level!r}")
    return value


def setup_logging(
    config: LoggingConfig | None = None, level: str | None = None
) -> logging.Logger:
    """Configure the root notekeep logger from ``[logging]`` settings.

    ``level`` overrides ``config.level``. Calling again reconfigures the
    same stderr handler instead of adding another.

    Raises:
        ConfigError: if the level name is not a logging level.
    """
    from notekeep_core.config import LoggingConfig

    config = config or LoggingConfig()
    logger = logging.getLogger("notekeep")
    logger.setLevel(_parse_level(level or config.level))

    handler = next(
        (h for h in logger.handlers if isinstance(h, _NotekeepHandler)), None
    )
    if handler is None:
        handler = _NotekeepHandler(sys.stderr)
        logger.addHandler(handler)

    if config.json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt="%H:%M:%S"))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the notekeep namespace."""
    return logging.getLogger(f"notekeep.{name}")
