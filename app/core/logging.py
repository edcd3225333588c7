import logging
import os
import uuid
from contextvars import ContextVar
from typing import Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | "
    "user=%(user_id)s req=%(request_id)s | %(message)s"
)

# httpx logs every OpenRouter request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def new_request_id(incoming: Optional[str] = None) -> str:
    """Bind a request id for the current task and return it."""
    request_id = incoming or uuid.uuid4().hex[:12]
    request_id_var.set(request_id)
    return request_id


class ContextFilter(logging.Filter):
    """Fills ``user_id`` and ``request_id`` so the format never raises KeyError."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "user_id"):
            record.user_id = "-"
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # Clear existing handlers to avoid duplicate logs in reloads
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    handler.addFilter(ContextFilter())
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
