"""Structured logging configuration with JSON formatter."""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_obj.update(record.extra_fields)

        return json.dumps(log_obj, default=str)


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends structured context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            context = ' '.join(f"{key}={value!r}" for key, value in extra_fields.items())
            line = f"{line} | {context}"
        return line


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None
) -> None:
    """Set up structured logging configuration.

    Console output goes to stderr because stdout carries the stdio JSON-RPC
    stream.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to use JSON formatting
        log_file: Optional log file path
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = ContextFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


class ExtraAdapter(logging.LoggerAdapter):
    """Adapter that attaches fixed fields to every record."""

    def process(self, msg, kwargs):
        fields = dict(self.extra)
        extra = kwargs.get('extra') or {}
        fields.update(extra.get('extra_fields', {}))
        kwargs['extra'] = {'extra_fields': fields}
        return msg, kwargs


def get_logger(name: str, extra_fields: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Get a logger with optional extra fields.

    Args:
        name: Logger name
        extra_fields: Extra fields to include in all logs

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if extra_fields:
        return ExtraAdapter(logger, extra_fields)

    return logger


def log_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` argument that carries structured context."""
    return {'extra_fields': fields}
