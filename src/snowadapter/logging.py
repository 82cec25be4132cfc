"""Logging for snowadapter.

One handler set on the ``snowadapter`` logger serves the connector, the
adapter and the API. uvicorn's own loggers are pointed at the same format
through ``uvicorn_log_config`` so a running service writes one log.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

ROOT_LOGGER = "snowadapter"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Credentials that may show up in request dumps and error bodies
_SECRET_PATTERNS = [
    (re.compile(r"(Basic|Bearer) [A-Za-z0-9+/=._-]+"), r"\1 [REDACTED]"),
    (re.compile(r"password=[^&\s]+"), "password=[REDACTED]"),
    (re.compile(r"\"password\"\s*:\s*\"[^\"]*\""), '"password": "[REDACTED]"'),
    (re.compile(r"(https?://)[^/\s:@]+:[^/\s@]+@"), r"\1[REDACTED]@"),
]


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Install handlers on the snowadapter logger.

    Args:
        level: Level name. Defaults to SNOWADAPTER_LOG_LEVEL, then INFO.
        log_file: Rotating log file. Defaults to SNOWADAPTER_LOG_FILE; no
            file is written when neither is set.
        console: Also log to stderr.

    Returns:
        The snowadapter logger.
    """
    level = (level or os.environ.get("SNOWADAPTER_LOG_LEVEL") or "INFO").upper()
    if log_file is None:
        log_file = os.environ.get("SNOWADAPTER_LOG_FILE") or None

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level, logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = []
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
            )
        )
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging configured (level=%s, file=%s)", level, log_file)
    return logger


def uvicorn_log_config(level: str | None = None) -> dict[str, Any]:
    """dictConfig for uvicorn that matches the snowadapter format."""
    level = (level or os.environ.get("SNOWADAPTER_LOG_LEVEL") or "INFO").upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
        "handlers": {
            "default": {"class": "logging.StreamHandler", "formatter": "default"},
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": ["default"], "level": level, "propagate": False},
        },
    }


def get_logger(name: str) -> logging.Logger:
    """Logger under the snowadapter namespace, e.g. get_logger("connector")."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class AdapterLoggerAdapter(logging.LoggerAdapter):
    """Prefixes messages with the adapter instance ID."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return f"[{self.extra['adapter_id']}] {msg}", kwargs


def get_adapter_logger(adapter_id: str) -> AdapterLoggerAdapter:
    """Logger for one adapter instance."""
    return AdapterLoggerAdapter(get_logger("adapter"), {"adapter_id": adapter_id})


def redact(text: str, max_length: int = 2000) -> str:
    """Strip credentials from text and cap its length for logging."""
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    if len(text) > max_length:
        text = f"{text[:max_length]}... [{len(text) - max_length} more chars]"
    return text
