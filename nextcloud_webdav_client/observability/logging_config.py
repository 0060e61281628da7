"""
Logging configuration for the WebDAV client.

This module provides:
- Structured JSON logging with python-json-logger
- Configurable log formats (JSON or text)
- Masking of BasicAuth credentials in log output
- Log level configuration per component
"""

import logging
import re
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

_AUTH_PATTERN = re.compile(r"(Basic|Bearer)\s+[A-Za-z0-9+/=._-]+", re.IGNORECASE)


class CredentialsFilter(logging.Filter):
    """
    Logging filter that masks Authorization header values.

    httpx debug logging can include request headers, which carry the
    base64 encoded username and password on every request.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _AUTH_PATTERN.sub(r"\1 ***", message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True


class WebDAVJsonFormatter(JsonFormatter):
    """JSON formatter with consistently named standard fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def setup_logging(log_format: str = "text", log_level: str = "INFO") -> None:
    """
    Configure logging for the WebDAV client.

    Args:
        log_format: "json" for JSON logging, "text" for human-readable text (default: "text")
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) (default: "INFO")
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Log to stderr so command output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.addFilter(CredentialsFilter())

    if log_format.lower() == "json":
        formatter: logging.Formatter = WebDAVJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(levelname)s [%(asctime)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    configure_component_loggers(log_level)

    root_logger.debug(f"Logging configured: format={log_format}, level={log_level}")


def configure_component_loggers(default_level: str = "INFO") -> None:
    """
    Configure log levels for specific components.

    Args:
        default_level: Default log level for the client's own loggers
    """
    logger_levels = {
        "nextcloud_webdav_client": default_level,
        "nextcloud_webdav_client.client": default_level,
        # HTTP client loggers (less verbose by default)
        "httpx": "WARNING",
        "httpcore": "WARNING",
    }

    for logger_name, level in logger_levels.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
