"""Loguru-backed logger adaptor shared by every module of the package."""

import logging
import sys
from typing import Any, Dict, Optional

from loguru import logger as _loguru_logger

from document_semaphore.constants import LOG_LEVEL

_loggers: Dict[str, "SemaphoreLoggerAdapter"] = {}
_sink_configured = False


# Add a Loguru handler for the Python logging system
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        _loguru_logger.opt(depth=6, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _configure_sink() -> None:
    global _sink_configured
    if _sink_configured:
        return

    _loguru_logger.remove()
    format_str = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <blue>[{level}]</blue> <cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
    _loguru_logger.add(sys.stderr, format=format_str, level=LOG_LEVEL, colorize=True)

    # httpx and the dapr sdk log through the standard library
    logging.basicConfig(
        level=logging.getLevelName(LOG_LEVEL), handlers=[InterceptHandler()], force=True
    )
    _sink_configured = True


class SemaphoreLoggerAdapter:
    """Forwards to loguru with the module name bound as ``logger_name``."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._log = _loguru_logger.bind(logger_name=name)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.info(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.debug(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.exception(msg, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> SemaphoreLoggerAdapter:
    """Return the cached adapter for ``name``, configuring the stderr sink once.

    Args:
        name: Logger name, usually ``__name__`` of the calling module.

    Returns:
        SemaphoreLoggerAdapter: Adapter bound to the given name.
    """
    if name is None:
        name = "document_semaphore"
    _configure_sink()
    if name not in _loggers:
        _loggers[name] = SemaphoreLoggerAdapter(name)
    return _loggers[name]


default_logger = get_logger()
