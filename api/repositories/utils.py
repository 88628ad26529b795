"""Repository utility functions for common database operations."""

import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from core.logger import get_logger
from core.wide_event import set_wide_event_fields

logger = get_logger(__name__)

# Threshold for logging slow queries (milliseconds)
SLOW_QUERY_THRESHOLD_MS = 500

P = ParamSpec("P")
R = TypeVar("R")


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (use escape="\\")."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def log_slow_query(
    operation_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator to record slow repository operations and errors.

    Slow queries (over SLOW_QUERY_THRESHOLD_MS) and failures are added to the
    request's wide event; failures are re-raised unchanged.

    Usage:
        @log_slow_query("list_services")
        async def list_services(self, ...) -> list[Service]:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                duration_ms = (time.perf_counter() - start_time) * 1000
                if duration_ms > SLOW_QUERY_THRESHOLD_MS:
                    logger.warning(
                        "db.slow_query",
                        operation=operation_name,
                        duration_ms=round(duration_ms, 2),
                    )
                    set_wide_event_fields(
                        db_slow_query=True,
                        db_operation=operation_name,
                        db_duration_ms=round(duration_ms, 2),
                    )
                return result
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                set_wide_event_fields(
                    db_query_error=True,
                    db_operation=operation_name,
                    db_duration_ms=round(duration_ms, 2),
                    db_error_type=type(e).__name__,
                )
                raise

        return wrapper

    return decorator
