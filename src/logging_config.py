"""Scoped logging: info/error file sinks plus console echo."""
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
INFO_LOG = "info.log"
ERROR_LOG = "error.log"
PACKAGE_LOGGER = "src"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below *level*."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def build_handlers(log_dir: Path) -> List[logging.Handler]:
    """Create the info/error file handlers and their stdout/stderr counterparts."""
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)
    below_error = _BelowLevelFilter(logging.ERROR)

    info_file = logging.FileHandler(log_dir / INFO_LOG, mode="a", encoding="utf-8")
    info_file.setLevel(logging.INFO)
    info_file.addFilter(below_error)

    error_file = logging.FileHandler(log_dir / ERROR_LOG, mode="a", encoding="utf-8")
    error_file.setLevel(logging.ERROR)

    console_out = logging.StreamHandler(sys.stdout)
    console_out.setLevel(logging.INFO)
    console_out.addFilter(below_error)

    console_err = logging.StreamHandler(sys.stderr)
    console_err.setLevel(logging.ERROR)

    handlers: List[logging.Handler] = [info_file, error_file, console_out, console_err]
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


@contextmanager
def logging_session(log_dir: Path, name: str = PACKAGE_LOGGER) -> Iterator[logging.Logger]:
    """
    Attach the analysis log sinks to the *name* logger for the duration of a run.

    Every handler is flushed, closed and detached on exit, including when the
    body raises.

    Args:
        log_dir: Directory for info.log and error.log (created if absent).
        name: Logger to attach to. Module loggers under ``src`` propagate to it.

    Yields:
        The configured logger.
    """
    logger = logging.getLogger(name)
    handlers = build_handlers(log_dir)
    previous_level = logger.level

    logger.setLevel(logging.INFO)
    for handler in handlers:
        logger.addHandler(handler)

    try:
        yield logger
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.flush()
            handler.close()
        logger.setLevel(previous_level)
