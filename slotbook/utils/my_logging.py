# slotbook/utils/my_logging.py
"""
Logging configuration.

Every record is stamped with the correlation id of the request being
served, so booking, conflict and status-change lines can be traced back to
the call that produced them. Outside a request the id is "-".
"""
from contextvars import ContextVar
import logging
import sys

from slotbook.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

# Loggers turned down to ERROR when running quietly
QUIET_LOGGERS = (
    "sqlalchemy",
    "alembic",
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
)

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")


class CorrelationIdFilter(logging.Filter):
    """Copies the current request's correlation id onto each record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


def build_handler(stream=None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(verbose=True):
    """Configure application logging"""
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO) if verbose else logging.WARNING

    logging.basicConfig(level=level, handlers=[build_handler()])

    if not verbose:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.ERROR)
