"""
MediCare+ AI Logging

Console lines look like::

    2026-10-18T09:14:03.512Z INFO  ai_integration   patient=P-102 | Symptom analysis complete ...

The ``medicare_ai.`` prefix is dropped from logger names so the component
column stays narrow, and records logged with ``extra={"patient_id": ...}``
carry the patient tag. Only the level column is colored. The optional file
handler writes the same layout without colors, for the audit trail.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

PACKAGE_PREFIX = "medicare_ai."


class StructuredFormatter(logging.Formatter):
    """Single-line formatter tagging each record with component and patient."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    @staticmethod
    def component(name: str) -> str:
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX):]
        return name.rsplit(".", 1)[-1] if name else "root"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc)
        stamp = timestamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{timestamp.microsecond // 1000:03d}Z"

        level = f"{record.levelname:5}"
        if self.use_color and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        patient_id = getattr(record, "patient_id", None)
        patient = f" patient={patient_id}" if patient_id is not None else ""

        line = f"{stamp} {level} {self.component(record.name):16}{patient} | {record.getMessage()}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_color: bool = True,
) -> None:
    """
    Route all MediCare+ AI output through ``StructuredFormatter``.

    Args:
        level: Level name; unknown names fall back to INFO.
        log_file: Also append uncolored lines to this file.
        use_color: Color the level column on the console.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=use_color))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter(use_color=False))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
