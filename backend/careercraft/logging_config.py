"""
Logging setup for CareerCraft.

Services log with ``extra={...}`` (user_id, industry, error_code, ...); the
formatter renders those as ``key=value`` pairs after the message so a single
stdout stream stays greppable.
"""
import logging
import sys

from careercraft.config import settings

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Third-party loggers that flood INFO with per-request noise
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "oci": logging.WARNING,
    "anthropic": logging.WARNING,
    "google_genai": logging.WARNING,
}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends ``extra=`` fields to log messages."""

    def format(self, record):
        message = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not extras:
            return message
        pairs = " ".join(f"{k}={_render(v)}" for k, v in sorted(extras.items()))
        return f"{message} | {pairs}"


def _render(value) -> str:
    text = str(value)
    return repr(text) if " " in text else text


def resolve_level(level: str = None) -> int:
    """Map a level name (default LOG_LEVEL) to a logging constant, falling back to INFO."""
    name = (level or settings.LOG_LEVEL or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str = None) -> logging.Handler:
    """Install a single stdout handler on the root logger and return it."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ExtraFieldsFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_level(level))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, lib_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(lib_level)
    return handler
