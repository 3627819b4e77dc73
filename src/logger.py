"""
Logging Setup Module.

Builds the application logger used across miners, analyzers and routers.
Messages may be plain strings or dicts; dicts are rendered as JSON objects so
that structured fields (repository, page, counts) stay machine readable.
"""

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """Formatter that renders dict messages as compact JSON."""

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            payload = dict(record.msg)
            payload.setdefault("level", record.levelname)
            payload.setdefault("logger", record.name)
            record = logging.makeLogRecord(
                {**record.__dict__, "msg": json.dumps(payload, default=str), "args": None}
            )
        return super().format(record)


class LogManager:
    """
    Configure and expose a named application logger.

    Attributes:
        logger (logging.Logger): The configured logger instance
    """

    def __init__(
        self,
        app_name: str,
        log_dir: Optional[str] = "logs",
        development: bool = False,
        level: int = logging.INFO,
    ):
        """Initialize the logger with console and file handlers.

        Args:
            app_name (str): Logger name, also used for the log file name.
            log_dir (Optional[str]): Directory for the rotating log file. No
                file handler is attached when empty.
            development (bool): Verbose console output when True.
            level (int): Logging level for the logger.
        """
        self.logger = logging.getLogger(app_name)
        self.logger.setLevel(logging.DEBUG if development else level)
        self.logger.propagate = False

        if self.logger.handlers:
            return

        formatter = StructuredFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )

        console = logging.StreamHandler()
        console.setFormatter(formatter)
        self.logger.addHandler(console)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, f"{app_name}.log"),
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)
