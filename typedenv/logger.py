import json
import logging
import sys
import time
from typing import Any

from .accessors import get_bool, get_str

PACKAGE_LOGGER = "typedenv"

_RESERVED = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(self, *, utc: bool = True) -> None:
        super().__init__()
        self.utc = utc

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self._timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        extras = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if extras:
            payload["extra"] = extras

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)

    def _timestamp(self, created: float) -> str:
        if self.utc:
            return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(created))
        return time.strftime("%Y-%m-%dT%H:%M:%S%z", time.localtime(created))


class PlainFormatter(logging.Formatter):
    """Plain text log formatter. Appends extras as key=value pairs."""

    def __init__(self, *, utc: bool = True) -> None:
        dtfmt = "%Y-%m-%dT%H:%M:%SZ" if utc else "%Y-%m-%d %H:%M:%S%z"
        super().__init__(fmt="%(asctime)s %(levelname)s %(name)s - %(message)s", datefmt=dtfmt)
        self.converter = time.gmtime if utc else time.localtime

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = [f"{k}={v}" for k, v in record.__dict__.items() if k not in _RESERVED]
        if extras:
            line = f"{line} | {' '.join(extras)}"
        return line


def get_logger(name: str | None = None) -> logging.Logger:
    """Returns a logger namespaced under the package logger."""
    if not name or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(
    *,
    level: str | None = None,
    fmt: str | None = None,
    utc: bool | None = None,
    stream: Any = None,
) -> logging.Handler:
    """
    Attaches a stdout handler to the package logger (not the root logger).
    Unset arguments are read from TYPEDENV_LOG_LEVEL, TYPEDENV_LOG_FORMAT
    and TYPEDENV_LOG_UTC. Returns the installed handler.
    """
    level_str = (level or get_str("TYPEDENV_LOG_LEVEL", "WARNING")).upper()
    fmt_str = (fmt or get_str("TYPEDENV_LOG_FORMAT", "plain")).lower()
    use_utc = get_bool("TYPEDENV_LOG_UTC", True) if utc is None else utc

    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        if not isinstance(h, logging.NullHandler):
            pkg.removeHandler(h)

    pkg.setLevel(getattr(logging, level_str, logging.WARNING))

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    if fmt_str == "json":
        handler.setFormatter(JsonFormatter(utc=use_utc))
    else:
        handler.setFormatter(PlainFormatter(utc=use_utc))

    pkg.addHandler(handler)

    get_logger("boot").debug("logging configured", extra={"level": level_str, "format": fmt_str, "utc": use_utc})
    return handler
