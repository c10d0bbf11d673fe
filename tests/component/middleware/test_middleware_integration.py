"""Component tests for middleware integration with Django/DRF."""

import uuid

from django.test import Client, TestCase

from core.constants import PROCESS_TIME_HEADER, REQUEST_ID_HEADER
from core.logging.context import get_request_id


class TestMiddlewareIntegration(TestCase):
    """Test middleware integration with actual HTTP requests."""

    def setUp(self):
        self.client = Client()

    def test_request_id_is_generated(self):
        response = self.client.get("/api/v1/notification/health/live")

        self.assertIn(REQUEST_ID_HEADER, response)
        try:
            uuid.UUID(response[REQUEST_ID_HEADER])
        except ValueError:
            self.fail("Request ID is not a valid UUID")

    def test_custom_request_id_is_preserved(self):
        custom_id = "custom-request-id-12345"

        response = self.client.get(
            "/api/v1/notification/health/live", headers={"x-request-id": custom_id}
        )

        self.assertEqual(response[REQUEST_ID_HEADER], custom_id)

    def test_request_id_is_cleared_after_response(self):
        self.client.get("/api/v1/notification/health/live")

        self.assertIsNone(get_request_id())

    def test_process_time_header(self):
        response = self.client.get("/api/v1/notification/health/live")

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0)

    def test_headers_present_on_404(self):
        response = self.client.get("/api/v1/notification/non-existent/")

        self.assertEqual(response.status_code, 404)
        self.assertIn(REQUEST_ID_HEADER, response)
        self.assertIn(PROCESS_TIME_HEADER, response)

    def test_rejected_request_keeps_request_id(self):
        response = self.client.get(
            "/api/v1/notification/users/me/notifications",
            headers={"x-request-id": "req-401"},
        )

        self.assertIn(response.status_code, (401, 403))
        self.assertEqual(response[REQUEST_ID_HEADER], "req-401")
