#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging mixin for papercut-rpc components.

Classes inherit ``ModernLogger`` and log through ``self.debug`` /
``self.info`` / ``self.warning`` / ``self.error``. Output goes through the
standard ``logging`` tree, rendered by a single ``rich`` handler per logger.
"""

import logging
import threading
from typing import Any, Union

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_PREFIX = "papercut_rpc"
_HANDLER_LOCK = threading.Lock()

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def resolve_log_level(level: Union[str, int]) -> int:
    """
    Translate a level name or number into a ``logging`` level.
    """
    if isinstance(level, int):
        return level
    normalized = str(level).strip().lower()
    if normalized not in _LEVELS:
        raise ValueError("Unknown log level: {0}".format(level))
    return _LEVELS[normalized]


def _install_rich_handler(logger: logging.Logger) -> None:
    with _HANDLER_LOCK:
        if any(isinstance(handler, RichHandler) for handler in logger.handlers):
            return
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)


def _apply_level(logger: logging.Logger, level: int) -> None:
    # Loggers are shared per name; a later, quieter instance never raises
    # the threshold an earlier, more verbose one asked for.
    with _HANDLER_LOCK:
        if logger.level == logging.NOTSET or level < logger.level:
            logger.setLevel(level)


class ModernLogger:
    """
    Mixin giving a class its own named logger.

    The logger is shared by every instance with the same name, so its level
    is the most verbose level any of them requested. Use ``logger.setLevel``
    directly to quiet it again.
    """

    def __init__(self, name: str = "papercut", level: Union[str, int] = "warning") -> None:
        logger_name = name if name.startswith(_LOGGER_PREFIX) else "{0}.{1}".format(
            _LOGGER_PREFIX, name
        )
        self._logger = logging.getLogger(logger_name)
        _apply_level(self._logger, resolve_log_level(level))
        _install_rich_handler(self._logger)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.critical(msg, *args, **kwargs)
