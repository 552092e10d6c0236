"""
Logging helpers for services and background jobs.

``get_logger`` hands out adapters that merge a bound context into the
``extra`` of every record, so the JSON formatter emits it as fields.
"""

import logging
import time
from functools import wraps
from typing import Any, Dict, Optional

from app.core.exceptions import BaseAppException


class LoggerAdapter:
    """Wraps a stdlib logger and carries key/value context across calls"""

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self._context: Dict[str, Any] = dict(context or {})

    def add_context(self, **kwargs) -> "LoggerAdapter":
        self._context.update(kwargs)
        return self

    def remove_context(self, *keys) -> "LoggerAdapter":
        for key in keys:
            self._context.pop(key, None)
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        # explicit extra wins over bound context
        kwargs['extra'] = {**self._context, **(kwargs.get('extra') or {})}
        kwargs.setdefault('stacklevel', 3)
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: Optional[str] = None, **context) -> LoggerAdapter:
    """Adapter over ``logging.getLogger(name)``, the ``app`` logger by default."""
    return LoggerAdapter(logging.getLogger(name or 'app'), context)


def log_execution_time(logger_name: Optional[str] = None):
    """
    Log how long the decorated call took.

    Completion is logged at DEBUG. A raising call is logged with the
    exception type and re-raised; application exceptions are logged at
    INFO, anything else at ERROR.
    """
    def decorator(func):
        logger = get_logger(logger_name or func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log = logger.info if isinstance(e, BaseAppException) else logger.error
                log(f"{func.__qualname__} failed", extra={
                    'function': func.__qualname__,
                    'execution_time': round(time.perf_counter() - started, 6),
                    'error_type': type(e).__name__,
                })
                raise
            logger.debug(f"{func.__qualname__} completed", extra={
                'function': func.__qualname__,
                'execution_time': round(time.perf_counter() - started, 6),
            })
            return result

        return wrapper

    return decorator
