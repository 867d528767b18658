"""
Structured Logging
==================

Every log line is a JSON object on stdout. Request-scoped lines carry the
correlation id set by ``CorrelationIDMiddleware``; scoring services add
their counts and latencies through ``extra``.

Usage:
    from incidentdesk.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("KB suggestions computed", extra={"suggestions": 3})
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import jsonlogger


REDACTED = "***REDACTED***"
SENSITIVE_KEY_MARKERS = ("password", "api_key", "token")
# Counters whose names contain a sensitive marker
NON_SENSITIVE_KEYS = ("tokens_used",)

NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "openai")


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    if lowered in NON_SENSITIVE_KEYS:
        return False
    return any(marker in lowered for marker in SENSITIVE_KEY_MARKERS)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter stamping each record with time, environment and
    correlation id, and masking credential-looking string fields.
    """

    def __init__(self, *args: Any, environment: str = "unknown", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        log_record["environment"] = getattr(record, "environment", self.environment)

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            log_record["correlation_id"] = correlation_id

        for key, value in list(log_record.items()):
            if isinstance(value, str) and _is_sensitive(key):
                log_record[key] = REDACTED


def setup_logging(level: str = "INFO", environment: str = "development") -> None:
    """
    Route all logging through one JSON stdout handler.

    Args:
        level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Stamped on every record
    """
    numeric_level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(CustomJsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        environment=environment,
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with ``__name__``."""
    return logging.getLogger(name)


@contextmanager
def log_latency(logger: logging.Logger, operation: str, **extra_context: Any):
    """
    Log how long the wrapped block took, as ``<operation> completed``.

    Usage:
        with log_latency(logger, "similarity_check", historical=4):
            analysis = TicketClusterer.analyze(ticket, history)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.info(
            f"{operation} completed",
            extra={
                "operation": operation,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                **extra_context,
            },
        )
