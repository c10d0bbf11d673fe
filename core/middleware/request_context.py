"""Request-scoped middleware: request id and timing."""

import time
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

import structlog

from core.constants import PROCESS_TIME_HEADER, REQUEST_ID_HEADER, SLOW_REQUEST_THRESHOLD
from core.logging.context import clear_dispatch_context, clear_request_id, set_request_id

logger = structlog.get_logger(__name__)


class RequestIDMiddleware:
    """Propagate or generate an X-Request-ID for every request.

    The id is stored thread-locally so every log event of the request, and
    of the dispatch pool threads it starts, carries it.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_dispatch_context()
            clear_request_id()


class ProcessTimeMiddleware:
    """Add X-Process-Time and log requests slower than the threshold."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        start_time = time.perf_counter()
        response = self.get_response(request)
        duration = time.perf_counter() - start_time

        response[PROCESS_TIME_HEADER] = f"{duration:.6f}"
        if duration > SLOW_REQUEST_THRESHOLD:
            logger.warning(
                "slow_request",
                method=request.method,
                path=request.path,
                duration_seconds=round(duration, 3),
                threshold_seconds=SLOW_REQUEST_THRESHOLD,
            )
        return response
