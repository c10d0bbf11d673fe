"""Unit tests for the request context middleware."""

import time
import unittest
import uuid
from unittest.mock import patch

from django.http import HttpRequest, HttpResponse

from core.constants import PROCESS_TIME_HEADER, REQUEST_ID_HEADER
from core.logging.context import (
    bind_dispatch_context,
    get_dispatch_context,
    get_request_id,
)
from core.middleware.request_context import (
    ProcessTimeMiddleware,
    RequestIDMiddleware,
)


def _create_request(headers=None):
    request = HttpRequest()
    request.method = "GET"
    request.path = "/test/"
    for key, value in (headers or {}).items():
        request.META[f"HTTP_{key.upper().replace('-', '_')}"] = value
    return request


class TestRequestIDMiddleware(unittest.TestCase):
    """Test cases for RequestIDMiddleware."""

    def setUp(self):
        self.seen = {}

        def get_response(request):
            self.seen["request_id"] = get_request_id()
            bind_dispatch_context("d-1", "task_assigned")
            return HttpResponse("OK")

        self.middleware = RequestIDMiddleware(get_response)

    def test_generates_request_id_when_not_present(self):
        request = _create_request()
        response = self.middleware(request)

        try:
            uuid.UUID(request.request_id)
        except ValueError:
            self.fail("Generated request ID is not a valid UUID")
        self.assertEqual(response[REQUEST_ID_HEADER], request.request_id)

    def test_uses_existing_request_id(self):
        existing_id = str(uuid.uuid4())
        request = _create_request(headers={REQUEST_ID_HEADER: existing_id})

        response = self.middleware(request)

        self.assertEqual(request.request_id, existing_id)
        self.assertEqual(response[REQUEST_ID_HEADER], existing_id)

    def test_request_id_is_visible_while_handling(self):
        request = _create_request(headers={REQUEST_ID_HEADER: "req-1"})

        self.middleware(request)

        self.assertEqual(self.seen["request_id"], "req-1")

    def test_context_is_cleared_after_response(self):
        self.middleware(_create_request())

        self.assertIsNone(get_request_id())
        self.assertEqual(get_dispatch_context(), {})


class TestProcessTimeMiddleware(unittest.TestCase):
    """Test cases for ProcessTimeMiddleware."""

    def test_adds_process_time_header(self):
        middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))

        response = middleware(_create_request())

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0)

    def test_header_reflects_slow_handler(self):
        def slow_get_response(request):
            time.sleep(0.05)
            return HttpResponse("OK")

        response = ProcessTimeMiddleware(slow_get_response)(_create_request())

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0.05)

    @patch("core.middleware.request_context.SLOW_REQUEST_THRESHOLD", 0.0)
    @patch("core.middleware.request_context.logger")
    def test_logs_slow_request(self, mock_logger):
        middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))

        middleware(_create_request())

        mock_logger.warning.assert_called_once()
        self.assertEqual(mock_logger.warning.call_args[0][0], "slow_request")
        self.assertEqual(mock_logger.warning.call_args[1]["path"], "/test/")

    @patch("core.middleware.request_context.logger")
    def test_fast_request_is_not_logged(self, mock_logger):
        middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))

        middleware(_create_request())

        mock_logger.warning.assert_not_called()
