"""Request-scoped wide event for canonical log lines.

RequestTimingMiddleware creates the dict at request start and emits it as a
single ``request.completed`` log line at request end. Anything in between
(routes, services, repositories) may add fields:

    from core.wide_event import set_wide_event_fields

    set_wide_event_fields(transaction_id=str(tx.id), transaction_status="completed")
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any]] = ContextVar("wide_event")


def init_wide_event() -> dict[str, Any]:
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Get the current wide event dict. Returns empty dict if not initialized."""
    try:
        return _wide_event.get()
    except LookupError:
        return {}


def set_wide_event_fields(**kwargs: Any) -> None:
    """Set fields on the current wide event.

    No-op outside a request (scripts, tests without the middleware).
    """
    event = get_wide_event()
    if event:
        event.update(kwargs)


def clear_wide_event() -> None:
    _wide_event.set({})
