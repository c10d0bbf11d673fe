"""Unit tests for push subscription management and ad-hoc sends."""

from unittest import TestCase
from unittest.mock import patch
from uuid import uuid4

from pywebpush import WebPushException

from core.exceptions.notification_exceptions import (
    PushSubscriptionNotFoundError,
    TransportError,
)
from core.schemas.push import PushSendRequest, PushSubscriptionRequest
from core.services.push_service import PushService
from core.services.transports import PushTransport
from tests.fakes import InMemoryPushSubscriptionRepository

SUBSCRIPTION = {
    "endpoint": "https://fcm.googleapis.com/fcm/send/abc",
    "keys": {"p256dh": "BNc-key", "auth": "tBH-auth"},
}


class PushServiceTest(TestCase):
    def setUp(self):
        self.subscriptions = InMemoryPushSubscriptionRepository()
        self.transport = PushTransport(
            self.subscriptions, "private-key", "mailto:ops@worktrac.test", timeout=3
        )
        self.service = PushService(self.subscriptions, self.transport)
        self.user_id = uuid4()

    def send_request(self, user_id=None):
        return PushSendRequest(
            user_id=user_id or self.user_id, title="Hello", message="From WorkTrac"
        )

    def test_register_replaces_previous_subscription(self):
        self.service.register(
            self.user_id, PushSubscriptionRequest.model_validate(SUBSCRIPTION)
        )
        replacement = {**SUBSCRIPTION, "endpoint": "https://push.example.com/new"}

        record = self.service.register(
            self.user_id, PushSubscriptionRequest.model_validate(replacement)
        )

        self.assertEqual(record.endpoint, "https://push.example.com/new")
        self.assertEqual(len(self.subscriptions.rows), 1)

    def test_unregister(self):
        self.service.register(
            self.user_id, PushSubscriptionRequest.model_validate(SUBSCRIPTION)
        )

        self.assertTrue(self.service.unregister(self.user_id))
        self.assertFalse(self.service.unregister(self.user_id))

    @patch("core.services.transports.push_transport.webpush")
    def test_send_delivers_to_subscription(self, mock_webpush):
        self.service.register(
            self.user_id, PushSubscriptionRequest.model_validate(SUBSCRIPTION)
        )

        self.service.send(self.send_request())

        self.assertEqual(
            mock_webpush.call_args.kwargs["subscription_info"]["endpoint"],
            SUBSCRIPTION["endpoint"],
        )

    @patch("core.services.transports.push_transport.webpush")
    def test_send_without_subscription_is_not_found(self, mock_webpush):
        with self.assertRaises(PushSubscriptionNotFoundError):
            self.service.send(self.send_request(uuid4()))

        mock_webpush.assert_not_called()

    @patch("core.services.transports.push_transport.webpush")
    def test_send_failure_raises_transport_error(self, mock_webpush):
        self.service.register(
            self.user_id, PushSubscriptionRequest.model_validate(SUBSCRIPTION)
        )
        mock_webpush.side_effect = WebPushException("expired")

        with self.assertRaises(TransportError):
            self.service.send(self.send_request())

    def test_send_without_vapid_key_is_a_transport_error(self):
        service = PushService(
            self.subscriptions,
            PushTransport(self.subscriptions, "", "mailto:a@b.test", timeout=3),
        )

        with self.assertRaises(TransportError):
            service.send(self.send_request())
