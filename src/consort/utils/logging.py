"""Structured logging configuration.

Loggers write to stdout, either as one JSON object per line or as plain
text, depending on ``settings.log_format``.  Structured values can be
attached with ``extra={"context": {...}}``; they are merged into the
JSON payload and appended to text lines.
"""

import logging
import json
import sys
from typing import Any, Dict, Optional

from ..config.settings import settings

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            log_data.update(context)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text formatter that appends ``key=value`` context pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JSONFormatter()
    return ContextTextFormatter(_TEXT_FORMAT)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_make_formatter(settings.log_format))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Reconfigure every ``consort`` logger already handed out.

    Used by the CLI to honour ``--log-level``/``--log-format`` after the
    modules have been imported.
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith("consort") or not isinstance(logger, logging.Logger):
            continue
        if level is not None:
            logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        if log_format is not None:
            for handler in logger.handlers:
                handler.setFormatter(_make_formatter(log_format))
