"""
LaunchPulse Logging
===================

Two output formats for the same records:
- text: one aligned line per record, for a terminal
- json: one object per line, carrying the analysis fields the engine
  attaches through `extra=` (category, slug, score, momentum, products)

Handlers write to stderr, so `--json` command output on stdout stays
machine-readable, and optionally to a size-rotated file.

Usage:
    from src.orchestrator.logging_config import setup_logging

    setup_logging(level="DEBUG", json_output=True)
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import List, Optional

# Attributes copied from a record into the JSON line when present
ANALYSIS_FIELDS = ("category", "slug", "score", "momentum", "products")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
TEXT_DATEFMT = "%H:%M:%S"


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

        {"ts": "...", "level": "INFO", "logger": "src.analytics.engine",
         "msg": "Analyzed 4 products ...", "products": 4, "score": 95, ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in ANALYSIS_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def build_handlers(log_file: Optional[str], max_bytes: int, backup_count: int) -> List[logging.Handler]:
    """stderr handler, plus a rotating file handler when `log_file` is set."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count,
        ))
    return handlers


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
):
    """
    Replace the root handlers with LaunchPulse ones.

    Args:
        level: Root log level name. Unknown names fall back to INFO.
        json_output: JSON lines instead of text.
        log_file: Optional rotating log file.
        max_bytes: Rotation size of the log file.
        backup_count: Rotated files kept.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    formatter = build_formatter(json_output)
    for handler in build_handlers(log_file, max_bytes, backup_count):
        handler.setFormatter(formatter)
        root.addHandler(handler)
