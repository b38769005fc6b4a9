"""
Logging setup for the app.

Readable lines by default; JSON lines (python-json-logger) when
LOG_FORMAT_JSON is enabled.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

READABLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_NAME = "hangman"


class ContextualJsonFormatter(JsonFormatter):
    """JSON formatter that always carries timestamp, level and logger fields."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        if not log_record.get("level"):
            log_record["level"] = record.levelname
        if not log_record.get("logger"):
            log_record["logger"] = record.name


def setup_logging(use_json: Optional[bool] = None, log_level: Optional[str] = None) -> logging.Handler:
    """
    Configure the root logger once.

    Streamlit re-executes the app script on every interaction, so an existing
    handler installed by this function is replaced rather than duplicated.

    Args:
        use_json: JSON output when True; readable when False; settings default when None.
        log_level: Level name such as "DEBUG"; settings default when None.
    """
    if use_json is None or log_level is None:
        from .config import load_settings

        settings = load_settings()
        use_json = settings.log_json if use_json is None else use_json
        log_level = settings.log_level if log_level is None else log_level

    root = logging.getLogger()
    for handler in root.handlers[:]:
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    if use_json:
        handler.setFormatter(ContextualJsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(READABLE_FORMAT))
    root.addHandler(handler)

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    return handler
