"""Logging utilities for parasimplex.

Every module obtains its logger through :func:`get_logger` so that all
package output shares one handler and one level switch.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be ``__name__`` from the calling module.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from parasimplex.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Tracing solution path")
    """
    if name is None:
        name = "parasimplex"

    logger_name = name if name.startswith("parasimplex") else f"parasimplex.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Set the logging level for all parasimplex loggers.

    Args:
        level: Logging level (``logging.DEBUG``, ``logging.INFO``, etc.) or
            its name (``'DEBUG'``, ``'INFO'``, ...).
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for parasimplex.

    Replaces the handlers of every logger created so far and sets the default
    used for loggers created afterwards.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: ``sys.stderr``).

    Example:
        >>> from parasimplex.logging import configure_logging
        >>> import logging
        >>> configure_logging(level=logging.INFO)
    """
    level = _coerce_level(level)

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
