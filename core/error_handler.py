"""Decorators shared by the loader for result wrapping and timing."""
from __future__ import annotations

import functools
import time
from typing import Callable, TypeVar

from loguru import logger

from core.result import Failure, Result, Success

T = TypeVar('T')


def as_result(func: Callable[..., T]) -> Callable[..., Result[T, Exception]]:
    """Decorator to convert function output to Result type.

    Success values are wrapped in Success, exceptions in Failure.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result[T, Exception]:
        try:
            return Success(func(*args, **kwargs))
        except Exception as e:
            return Failure(e)
    return wrapper


def log_execution_time(logger_instance=logger, level: str = "DEBUG"):
    """Decorator to log function execution time.

    Args:
        logger_instance: Logger to use
        level: Log level (DEBUG, INFO, etc.)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start_time
                log_func = getattr(logger_instance, level.lower(), logger_instance.debug)
                log_func(f"{func.__name__} executed in {elapsed:.3f}s")
        return wrapper
    return decorator
