import logging
import os
from dataclasses import dataclass
from typing import Optional

from .errors import UsageError

USAGE = "Usage: redis-audit <host> <port> <dbnum> <sample_size>"


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    db: int
    sample_size: int
    password: Optional[str] = None
    socket_timeout: Optional[float] = None
    log_level: str = "WARNING"
    progress_every: int = 1000


def _number(name, raw, kind):
    try:
        return kind(raw)
    except (TypeError, ValueError):
        raise UsageError(f"{name} must be {kind.__name__}, got {raw!r}") from None


def _log_level(raw):
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise UsageError(f"REDIS_AUDIT_LOG_LEVEL must be a logging level, got {raw!r}")
    return level


def load_settings(args, environ=None):
    """Build settings from the four positional arguments and REDIS_AUDIT_* variables."""
    environ = os.environ if environ is None else environ
    if len(args) != 4:
        raise UsageError(USAGE)

    host, port, db, sample_size = args
    timeout = environ.get("REDIS_AUDIT_SOCKET_TIMEOUT")

    return Settings(
        host=host,
        port=_number("port", port, int),
        db=_number("dbnum", db, int),
        sample_size=_number("sample_size", sample_size, int),
        password=environ.get("REDIS_AUDIT_PASSWORD") or None,
        socket_timeout=_number("REDIS_AUDIT_SOCKET_TIMEOUT", timeout, float) if timeout else None,
        log_level=_log_level(environ.get("REDIS_AUDIT_LOG_LEVEL", "WARNING")),
        progress_every=_number(
            "REDIS_AUDIT_PROGRESS_EVERY", environ.get("REDIS_AUDIT_PROGRESS_EVERY", "1000"), int
        ),
    )
