import functools
import logging
from typing import Type

from utils.exceptions import PatternsDemoException

def handle_engine_errors(operation_name: str, wrap_as: Type[PatternsDemoException] = PatternsDemoException):
    """
    Decorator for consistent error handling in engines.

    Project exceptions propagate untouched; anything else is logged on the
    engine's logger and re-raised as ``wrap_as`` chained to the original.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except PatternsDemoException:
                raise
            except Exception as e:
                owner = args[0] if args else None
                logger = getattr(owner, 'logger', None) or logging.getLogger(func.__module__)
                logger.error(f"{operation_name} failed: {e}", exc_info=True)
                raise wrap_as(f"{operation_name} failed: {e}") from e
        return wrapper
    return decorator
