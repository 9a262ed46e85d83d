# Logging setup and the trace log service
# helium/core/logging_config.py

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
TRACE_LOGGER_NAME = "helium.trace"

_handler: Optional[logging.Handler] = None


class CorrelationIdFilter(logging.Filter):
    """Gives every record a correlation_id so the shared format never breaks."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Configures the root logger to write to stdout with the correlation-aware format.
    Safe to call more than once; the handler is only installed the first time.
    """
    global _handler
    root = logging.getLogger()
    root.setLevel(level)
    if _handler is not None and _handler in root.handlers:
        return

    _handler = logging.StreamHandler(stream=sys.stdout)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _handler.addFilter(CorrelationIdFilter())
    root.addHandler(_handler)


class LogService:
    """
    Thin logging collaborator used by the controllers and middleware.

    Every entry goes through the ``helium.trace`` logger and carries the
    request's correlation id (or "-" when there is none).
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(TRACE_LOGGER_NAME)

    def trace(self, message: str, correlation_id: Optional[str] = None) -> None:
        self.logger.info(message, extra={"correlation_id": correlation_id or "-"})
