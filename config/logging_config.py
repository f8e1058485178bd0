import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "career-readiness-engine"

# Server loggers that otherwise install their own plain-text handlers.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

class AssessmentJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, tagged with the service and the emitting source line."""

    def add_fields(self, log_record, record, message_dict):
        super(AssessmentJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record.setdefault(
            'timestamp', datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        )
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['source'] = f"{record.module}:{record.lineno}"
        log_record['service'] = SERVICE_NAME


def setup_logging(log_level_str: str = "INFO", stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Sends every record, server logs included, through one JSON handler on the root logger.
    Calling it again updates the level and keeps the existing handler.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    for handler in root_logger.handlers:
        if isinstance(handler.formatter, AssessmentJsonFormatter):
            return handler

    log_handler = logging.StreamHandler(stream or sys.stdout)
    log_handler.setFormatter(AssessmentJsonFormatter('%(message)s'))
    root_logger.addHandler(log_handler)
    root_logger.info(f"JSON logging enabled at level {logging.getLevelName(log_level)}")
    return log_handler
