"""Logging configuration for package signature validation."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime

from opentelemetry import trace

from package_signing.config import SigningConfig

TEXT_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(service_name)s] - [%(name)s] - "
    "[%(module)s.%(funcName)s:%(lineno)d] - %(message)s"
)

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

DEFAULT_SERVICE_NAME = "package-signing"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_ENV_VAR = "PACKAGE_SIGNING_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "PACKAGE_SIGNING_LOG_FORMAT"
LOG_OFF_LEVEL = "OFF"


class ServiceNameFilter(logging.Filter):
    """Inject the service name into log records."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


class TraceContextFilter(logging.Filter):
    """Inject the current OpenTelemetry trace and span ids into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        else:
            record.trace_id = None
            record.span_id = None
        return True


class SigningJSONFormatter(logging.Formatter):
    """JSON formatter with trace correlation."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service_name", "unknown"),
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if getattr(record, "trace_id", None):
            log_entry["trace_id"] = record.trace_id
        if getattr(record, "span_id", None):
            log_entry["span_id"] = record.span_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(
    service_name: str = DEFAULT_SERVICE_NAME,
    log_level_env_var: str = LOG_LEVEL_ENV_VAR,
    log_format_env_var: str = LOG_FORMAT_ENV_VAR,
) -> None:
    """
    Configure the root logger.

    Args:
        service_name: Name used to identify log records
        log_level_env_var: Environment variable to read the log level from
        log_format_env_var: Environment variable to read the log format from
            (``json``, ``text`` or a ``logging.Formatter`` format string)
    """
    log_level_str = os.environ.get(log_level_env_var, DEFAULT_LOG_LEVEL).upper()
    log_format_str = os.environ.get(log_format_env_var, "text")
    _configure_root_logger(service_name, log_level_str, log_format_str)


def configure_logging(config: SigningConfig, service_name: str = DEFAULT_SERVICE_NAME) -> None:
    """Configure the root logger from a loaded configuration."""
    _configure_root_logger(service_name, config.log_level, config.log_format)


def _configure_root_logger(service_name: str, log_level_str: str, log_format_str: str) -> None:
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_level_str == LOG_OFF_LEVEL:
        root_logger.setLevel(logging.CRITICAL + 1)
        print(f"Logging is OFF for {service_name}.", file=sys.stderr)
        return

    numeric_log_level = LOG_LEVELS.get(log_level_str, logging.INFO)
    root_logger.setLevel(numeric_log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    if log_format_str.lower() == "json":
        formatter: logging.Formatter = SigningJSONFormatter()
    elif log_format_str.lower() == "text":
        formatter = logging.Formatter(TEXT_LOG_FORMAT)
    else:
        formatter = logging.Formatter(log_format_str)
    console_handler.setFormatter(formatter)

    console_handler.addFilter(ServiceNameFilter(service_name))
    console_handler.addFilter(TraceContextFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging configured. Service: %s, Level: %s", service_name, log_level_str
    )
