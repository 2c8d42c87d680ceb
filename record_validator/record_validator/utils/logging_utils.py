import logging
import sys
from typing import IO, Optional


DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def _stream_handler(stream: IO[str], level: int, formatter: logging.Formatter) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Replace the handlers of a logger (root by default) with a stdout/stderr pair.

    Records below ``stderr_level`` are written to stdout, the rest to stderr.
    A named logger stops propagating so records are not printed twice.
    """
    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)
    stderr_level = max(stderr_level, logging.DEBUG)

    target = logging.getLogger(logger_name)
    target.handlers.clear()
    target.setLevel(level)
    target.propagate = logger_name is None

    stdout_handler = _stream_handler(sys.stdout, logging.DEBUG, formatter)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    target.addHandler(stdout_handler)
    target.addHandler(_stream_handler(sys.stderr, stderr_level, formatter))
    return target
