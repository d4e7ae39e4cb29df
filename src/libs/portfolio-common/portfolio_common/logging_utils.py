# src/libs/portfolio-common/portfolio_common/logging_utils.py
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from pythonjsonlogger import jsonlogger

from .config import ENVIRONMENT, LOG_LEVEL, SERVICE_NAME

NOT_SET = "<not-set>"

# Request-scoped identifiers, attached to every log record emitted while set.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default=NOT_SET)
request_id_var: ContextVar[str] = ContextVar("request_id", default=NOT_SET)
trace_id_var: ContextVar[str] = ContextVar("trace_id", default=NOT_SET)

LOG_FORMAT = (
    "%(asctime)s %(name)s %(levelname)s %(message)s %(service)s %(environment)s "
    "%(correlation_id)s %(request_id)s %(trace_id)s"
)


class CorrelationIdFilter(logging.Filter):
    """Injects the request-scoped identifiers and service identity into each record."""
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        record.request_id = request_id_var.get()
        record.trace_id = trace_id_var.get()
        record.service = SERVICE_NAME
        record.environment = ENVIRONMENT
        return True


@contextmanager
def correlation_context(correlation_id: str, request_id: str, trace_id: str) -> Iterator[None]:
    """
    Binds the identifiers for the duration of a request and restores the
    previous values afterwards, even when the request fails.
    """
    tokens = (
        (correlation_id_var, correlation_id_var.set(correlation_id)),
        (request_id_var, request_id_var.set(request_id)),
        (trace_id_var, trace_id_var.set(trace_id)),
    )
    try:
        yield
    finally:
        for var, token in tokens:
            var.reset(token)


def setup_logging(level: str = LOG_LEVEL):
    """
    Configures the root logger for correlation-aware JSON logging. Every logger
    in the process, the valuation engine's included, inherits this setup.
    """
    root_logger = logging.getLogger()

    # Avoid duplicate output when called more than once (e.g. on reload).
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            LOG_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    )
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)


def generate_correlation_id(prefix: str) -> str:
    """Returns '<prefix>:<uuid4>', e.g. 'DSH:0c7e...'."""
    return f"{prefix}:{uuid.uuid4()}"
