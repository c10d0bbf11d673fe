"""Unit tests for the Telegram webhook handler."""

from unittest import TestCase
from unittest.mock import Mock

from core.constants import (
    CHAT_ERROR_MESSAGE,
    CHAT_FALLBACK_MESSAGE,
    CHAT_INVALID_CODE_MESSAGE,
    CHAT_LINK_SUCCESS_MESSAGE,
    CHAT_WELCOME_MESSAGE,
)
from core.exceptions.notification_exceptions import TransportError
from core.services.chat_link_service import ChatLinkService
from core.services.chat_webhook_service import ChatWebhookService
from tests.fakes import FakeClock, InMemoryChatLinkRepository, InMemoryUserRepository


def update(text=None, chat_id=4242):
    message = {"message_id": 1, "chat": {"id": chat_id, "type": "private"}}
    if text is not None:
        message["text"] = text
    return {"update_id": 99, "message": message}


class ChatWebhookServiceTest(TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.users = InMemoryUserRepository()
        self.links = InMemoryChatLinkRepository()
        self.client = Mock()
        self.linking = ChatLinkService(
            self.links, self.users, self.client, clock=self.clock
        )
        self.service = ChatWebhookService(self.linking, self.client)

    def reply_text(self):
        args, kwargs = self.client.send_message.call_args
        self.assertEqual(args[0], "4242")
        self.assertIsNone(kwargs["parse_mode"])
        return args[1]

    def test_start_command_gets_welcome(self):
        route = self.service.handle_update(update("/start"))

        self.assertEqual(route, "start")
        self.assertEqual(self.reply_text(), CHAT_WELCOME_MESSAGE)

    def test_start_command_with_payload_gets_welcome(self):
        self.assertEqual(self.service.handle_update(update("/start abc")), "start")

    def test_valid_code_links_the_chat(self):
        user_id = self.users.add()
        code = self.linking.issue_code(user_id).verification_code

        route = self.service.handle_update(update(code))

        self.assertEqual(route, "verification")
        self.assertEqual(self.reply_text(), CHAT_LINK_SUCCESS_MESSAGE)
        self.assertEqual(self.links.get(user_id).chat_id, "4242")
        self.assertTrue(self.links.get(user_id).linked)

    def test_expired_code_gets_invalid_reply(self):
        user_id = self.users.add()
        code = self.linking.issue_code(user_id).verification_code
        self.clock.advance(minutes=45)

        self.service.handle_update(update(code))

        self.assertEqual(self.reply_text(), CHAT_INVALID_CODE_MESSAGE)
        self.assertFalse(self.links.get(user_id).linked)

    def test_unknown_code_gets_invalid_reply(self):
        self.service.handle_update(update("123456"))

        self.assertEqual(self.reply_text(), CHAT_INVALID_CODE_MESSAGE)

    def test_other_text_gets_fallback(self):
        for text in ("hello", "12345", "1234567", "12a456", ""):
            with self.subTest(text=text):
                self.assertEqual(self.service.handle_update(update(text)), "fallback")
                self.assertEqual(self.reply_text(), CHAT_FALLBACK_MESSAGE)

    def test_padded_text_is_not_a_code_or_command(self):
        user_id = self.users.add()
        code = self.linking.issue_code(user_id).verification_code

        for text in (f"  {code} ", f"{code}\n", " /start"):
            with self.subTest(text=text):
                self.assertEqual(self.service.handle_update(update(text)), "fallback")
                self.assertEqual(self.reply_text(), CHAT_FALLBACK_MESSAGE)
        self.assertFalse(self.links.get(user_id).linked)

    def test_message_without_text_gets_fallback(self):
        self.assertEqual(self.service.handle_update(update()), "fallback")

    def test_update_without_message_is_ignored(self):
        self.assertIsNone(self.service.handle_update({"update_id": 5}))
        self.client.send_message.assert_not_called()

    def test_unparseable_update_is_ignored(self):
        self.assertIsNone(self.service.handle_update({"message": {"text": "hi"}}))
        self.client.send_message.assert_not_called()

    def test_internal_error_gets_generic_reply(self):
        self.linking.verify_code = Mock(side_effect=RuntimeError("db gone"))

        route = self.service.handle_update(update("654321"))

        self.assertEqual(route, "verification")
        self.assertEqual(self.reply_text(), CHAT_ERROR_MESSAGE)

    def test_reply_failure_is_not_raised(self):
        self.client.send_message.side_effect = TransportError("telegram down")

        self.assertEqual(self.service.handle_update(update("/start")), "start")
