r"""Console logging for applications built on appkit.

Every event is rendered on one line as ``[LEVEL] message {metadata}``,
where the metadata is the JSON form of the fields passed through the
``extra`` argument of the logging call. The threshold is chosen once,
from the environment name, when the logger is created.

Example:
    ```pycon
    >>> import io
    >>> from appkit.logger import create_logger
    >>> stream = io.StringIO()
    >>> logger = create_logger("production", name="appkit.doctest", stream=stream)
    >>> logger.warning("Disk almost full", extra={"free_mb": 12})
    >>> stream.getvalue()
    '[WARN] Disk almost full {"free_mb": 12}\n'

    ```
"""

from __future__ import annotations

__all__ = [
    "SILENT",
    "VERBOSE",
    "ConsoleFormatter",
    "create_logger",
    "get_log_level",
    "shutdown_logger",
]

import json
import logging
from typing import IO, Any

# Between INFO and DEBUG, used for staging
VERBOSE = 15
# Above every standard level, disables all output
SILENT = logging.CRITICAL + 10

logging.addLevelName(VERBOSE, "VERBOSE")

_LEVEL_NAMES = {
    logging.CRITICAL: "CRITICAL",
    logging.ERROR: "ERROR",
    logging.WARNING: "WARN",
    logging.INFO: "INFO",
    VERBOSE: "VERBOSE",
    logging.DEBUG: "DEBUG",
}

# Attributes present on every record, never treated as metadata
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def get_log_level(environment: str | None) -> int:
    """Return the logging threshold of an environment.

    Args:
        environment: The environment name.

    Returns:
        ``INFO`` in production, ``VERBOSE`` in staging, ``SILENT`` in
        testing and ``DEBUG`` otherwise.

    Example:
        ```pycon
        >>> import logging
        >>> from appkit.logger import get_log_level
        >>> get_log_level("production") == logging.INFO
        True
        >>> get_log_level(None) == logging.DEBUG
        True

        ```
    """
    if environment == "production":
        return logging.INFO
    if environment == "staging":
        return VERBOSE
    if environment == "testing":
        return SILENT
    return logging.DEBUG


class ConsoleFormatter(logging.Formatter):
    r"""Render records as ``[LEVEL] message {metadata}``.

    The metadata part is omitted when the record carries no extra field.
    Exception information, if any, follows on the next lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        line = f"[{level}] {record.getMessage()}"
        metadata = self.extract_metadata(record)
        if metadata:
            line = f"{line} {json.dumps(metadata, default=str, ensure_ascii=False)}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        if record.stack_info:
            line = f"{line}\n{self.formatStack(record.stack_info)}"
        return line

    @staticmethod
    def extract_metadata(record: logging.LogRecord) -> dict[str, Any]:
        r"""Return the fields added to ``record`` through ``extra``."""
        return {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        }


def create_logger(
    environment: str | None,
    name: str = "appkit",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure and return the console logger of an application.

    Calling it again with the same name replaces the previous handler,
    so the logger never prints an event twice.

    Args:
        environment: The environment name, used to pick the threshold.
        name: The logger name.
        stream: The stream to write to. Defaults to ``sys.stderr``.

    Returns:
        The configured logger. It does not propagate to the root logger.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if isinstance(handler.formatter, ConsoleFormatter):
            logger.removeHandler(handler)
            handler.close()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ConsoleFormatter())
    logger.addHandler(handler)
    logger.setLevel(get_log_level(environment))
    logger.propagate = False
    return logger


def shutdown_logger(logger: logging.Logger) -> None:
    r"""Flush and detach every handler of ``logger``."""
    for handler in list(logger.handlers):
        handler.flush()
        logger.removeHandler(handler)
        handler.close()
