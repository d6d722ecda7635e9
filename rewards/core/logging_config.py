"""
Structured JSON logging configuration.

This module sets up application-wide JSON logging with:
- Consistent field names across all logs
- Request correlation IDs, propagated through a context variable
- Reward pipeline context (account, transaction, merchant)
- Timestamp, level, message, path, status code, latency

Logs are output to stdout in JSON format for easy parsing by
log aggregation systems.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Correlation ID of the request being handled, set by RequestIDMiddleware
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Fields every formatter knows about, in output order
CONTEXT_FIELDS = (
    "request_id",
    "account_number",
    "transaction_id",
    "merchant_number",
    "path",
    "method",
    "status_code",
    "latency_ms",
)

# Attributes present on every LogRecord; anything else came from extra={...}
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "taskName", "exc_info", "exc_text", "stack_info",
})


class RequestIDFilter(logging.Filter):
    """
    Attach the current request ID to records that don't carry one.

    Lets service code log without threading the request through every call.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            request_id = request_id_var.get()
            if request_id is not None:
                record.request_id = request_id
        return True


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs log records as single-line JSON objects with consistent fields:
    - timestamp: ISO 8601 format with microseconds (UTC)
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - message: Log message
    - logger: Logger name (module path)
    - request_id, account_number, transaction_id, merchant_number (if available)
    - path, method, status_code, latency_ms (if available)
    - exception: Exception details (if exception occurred)
    - any other field passed via ``extra``

    Example output:
        {"timestamp": "2026-10-19T10:30:00.123456+00:00", "level": "INFO",
         "message": "Reward recorded", "logger": "rewards.services.reward_network",
         "transaction_id": "tx-1", "account_number": "123456789"}
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON string.

        Args:
            record: LogRecord to format

        Returns:
            JSON string representation of log record
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        # Any other custom fields from extra
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        # Decimals and datetimes fall back to str()
        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True
) -> None:
    """
    Configure application logging.

    Sets up:
    - Root logger with specified level
    - JSON formatter (if json_format=True)
    - StreamHandler to stdout with the request ID filter
    - Removes default handlers

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatter (True) or simple formatter (False)

    Note:
        Call this once at application startup, before any logging occurs.
    """
    root_logger = logging.getLogger()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.addFilter(RequestIDFilter())

    if json_format:
        formatter = JSONFormatter()
    else:
        # Simple format for development/debugging
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance with given name.

    Args:
        name: Logger name (usually __name__ of the module)

    Example:
        logger = get_logger(__name__)
        logger.info("Reward recorded", extra={"transaction_id": "tx-1"})
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    request_id: Optional[str] = None,
    account_number: Optional[str] = None,
    transaction_id: Optional[str] = None,
    merchant_number: Optional[str] = None,
    **extra_fields: Any
) -> None:
    """
    Log message with structured context fields.

    Convenience function for logging with the reward pipeline's common
    context fields. ``None`` values are left out.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        request_id: Request correlation ID
        account_number: Account being rewarded
        transaction_id: Dining transaction ID
        merchant_number: Restaurant merchant number
        **extra_fields: Additional fields to include

    Example:
        log_with_context(
            logger,
            "info",
            "Reward recorded",
            transaction_id="tx-1",
            account_number="123456789",
            amount="8.00",
        )
    """
    extra: Dict[str, Any] = {
        key: value
        for key, value in (
            ("request_id", request_id),
            ("account_number", account_number),
            ("transaction_id", transaction_id),
            ("merchant_number", merchant_number),
        )
        if value is not None
    }
    extra.update(extra_fields)

    log_method = getattr(logger, level.lower())
    log_method(message, extra=extra)
