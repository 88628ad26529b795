"""Request telemetry: canonical per-request log lines and business events."""

import os
import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import bind_contextvars, clear_contextvars, get_logger
from core.wide_event import clear_wide_event, get_wide_event, init_wide_event

logger = get_logger(__name__)

SERVICE_NAME = os.getenv("SERVICE_NAME", "offer-hub-api")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "0.1.0")

# Requests slower than this are always logged
SLOW_REQUEST_THRESHOLD_MS = 1000


class RequestTimingMiddleware:
    """Times each request and emits one wide event at request end.

    - One wide event per request (canonical log line)
    - Errors, slow requests and writes are always emitted; fast reads are not
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")

        client = scope.get("client")
        client_ip = client[0] if client else "unknown"
        request_id = str(uuid.uuid4())
        clear_contextvars()
        bind_contextvars(request_id=request_id)

        wide_event = init_wide_event()
        wide_event["service_name"] = SERVICE_NAME
        wide_event["service_version"] = SERVICE_VERSION
        wide_event["request_id"] = request_id
        wide_event["http_method"] = method
        wide_event["http_path"] = path
        wide_event["http_client_ip"] = client_ip

        response_status: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status

            if message.get("type") == "http.response.start":
                response_status = int(message.get("status", 0))
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                duration_ms = (time.perf_counter() - start_time) * 1000
                headers.append(
                    (b"x-request-duration-ms", f"{duration_ms:.2f}".encode())
                )
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers

            elif message.get("type") == "http.response.body" and not message.get(
                "more_body", False
            ):
                duration_ms = (time.perf_counter() - start_time) * 1000

                route = scope.get("route")
                route_path = getattr(route, "path", None) or path

                event = get_wide_event()
                event["http_route"] = route_path
                event["http_status_code"] = response_status
                event["duration_ms"] = round(duration_ms, 2)
                event["outcome"] = (
                    "success" if response_status and response_status < 400 else "error"
                )

                should_emit = (
                    response_status is None
                    or response_status >= 400
                    or duration_ms > SLOW_REQUEST_THRESHOLD_MS
                    or method != "GET"
                )

                if should_emit:
                    logger.info("request.completed", **event)

                clear_wide_event()

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            route = scope.get("route")
            route_path = getattr(route, "path", None) or path
            event = get_wide_event()
            event["http_route"] = route_path
            event["duration_ms"] = round(duration_ms, 2)
            event["outcome"] = "exception"
            event["exception_type"] = type(exc).__name__
            logger.info("request.completed", **event)
            clear_wide_event()
            raise


def log_business_event(
    name: str, value: float = 1, properties: dict[str, str] | None = None
) -> None:
    """Log a structured business event (users registered, payments completed)."""
    logger.info("business.event", event_name=name, value=value, **(properties or {}))
