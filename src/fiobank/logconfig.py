"""Logging configuration for the command-line tool."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "fiobank"
REDACTED = "<token>"


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter adding timestamp, level and service name."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


class SecretRedactingFilter(logging.Filter):
    """Replace registered secrets in every record passing the handler.

    urllib3 logs full request lines at DEBUG, and Fio request paths carry
    the token.
    """

    def __init__(self) -> None:
        super().__init__()
        self.secrets: set[str] = set()

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        message = record.getMessage()
        for secret in self.secrets:
            message = message.replace(secret, REDACTED)
        record.msg = message
        record.args = None
        return True


_redacting_filter = SecretRedactingFilter()


def redact_secret(secret: str) -> None:
    """Register a secret that must never reach the log output."""
    if secret:
        _redacting_filter.secrets.add(secret)


def setup_logging(level: int = logging.WARNING, json_format: bool = False) -> None:
    """Configure the root logger to write to stderr.

    Stdout is reserved for command output such as downloaded reports.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    formatter: logging.Formatter
    if json_format:
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    handler.addFilter(_redacting_filter)
    logger.addHandler(handler)
