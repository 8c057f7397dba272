"""
Logging for the calculator.

Records carry the calculator component that emitted them ("parser",
"session") and, where there is one, the input expression. Both show up in
the text and JSON output. The console prints results on stdout, so log
records always go to stderr or a file.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

LOGGER_PREFIX = "calc"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with component, expression and extra fields on top"""

    def format(self, record: logging.LogRecord) -> str:
        fields: Dict[str, Any] = dict(getattr(record, "extra_data", {}))
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "component": fields.pop("component", record.name),
            "message": record.getMessage(),
        }
        if "expression" in fields:
            entry["expression"] = fields.pop("expression")
        entry.update(fields)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """
    Single-line human format:

        2026-01-01 12:00:00 INFO [session] Evaluated expression: 1 + 2 (result=3.0)
    """

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        fields = dict(getattr(record, "extra_data", {}))
        component = fields.pop("component", record.name)
        expression = fields.pop("expression", None)

        line = f"{self.formatTime(record, self.datefmt)} {record.levelname} [{component}] {record.getMessage()}"
        if expression is not None:
            line += f": {expression}"
        if fields:
            line += " (" + ", ".join(f"{key}={value}" for key, value in fields.items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str, log_format: str = "text", log_file: Optional[str] = None) -> None:
    """
    Route calculator log records to stderr (and optionally a file).

    Only the "calc" logger hierarchy is configured; the root logger is left alone.

    Args:
        level: Level name such as "INFO" (unknown names fall back to WARNING)
        log_format: "json" or "text"
        log_file: Extra file to append records to
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    formatter: logging.Formatter = JsonFormatter() if log_format == "json" else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logger = logging.getLogger(LOGGER_PREFIX)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(log_level)


class ComponentLogger(logging.LoggerAdapter):
    """Logger bound to one calculator component; accepts extra_data={...} per call"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.setdefault("extra", {})
        extra["extra_data"] = {**self.extra, **kwargs.pop("extra_data", {})}
        return msg, kwargs


def get_logger(component: str) -> ComponentLogger:
    """Logger for a component, under the "calc" hierarchy"""
    return ComponentLogger(
        logging.getLogger(f"{LOGGER_PREFIX}.{component}"),
        {"component": component},
    )
