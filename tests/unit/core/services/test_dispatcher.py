"""Unit tests for the notification dispatcher."""

from unittest import TestCase
from uuid import uuid4

from core.enums import (
    ChannelSelector,
    DeliveryChannel,
    DeliveryStatus,
    NotificationType,
)
from core.exceptions.notification_exceptions import ValidationError
from core.schemas.notification import DeliveryResult, NotificationEvent
from core.schemas.preferences import NotificationPreferencesSchema
from core.services.dispatcher import NotificationDispatcher
from core.services.preference_service import PreferenceService
from core.services.transports import InAppTransport
from core.services.transports.base import CHANNEL_NOT_CONFIGURED, NO_SUBSCRIPTION
from tests.fakes import (
    InMemoryNotificationRepository,
    InMemoryPreferenceRepository,
    InMemoryUserRepository,
    RecordingTransport,
)


def preferences(**selectors) -> NotificationPreferencesSchema:
    values = NotificationPreferencesSchema.default().model_dump()
    values.update(selectors)
    return NotificationPreferencesSchema(**values)


class DispatcherTestCase(TestCase):
    def setUp(self):
        self.users = InMemoryUserRepository()
        self.notifications = InMemoryNotificationRepository()
        self.preference_repository = InMemoryPreferenceRepository()
        self.push = RecordingTransport(DeliveryChannel.PUSH)
        self.chat = RecordingTransport(DeliveryChannel.CHAT)
        self.email = RecordingTransport(DeliveryChannel.EMAIL)
        self.dispatcher = self.build_dispatcher(
            {
                DeliveryChannel.PUSH: self.push,
                DeliveryChannel.CHAT: self.chat,
                DeliveryChannel.EMAIL: self.email,
            }
        )

    def build_dispatcher(self, transports, max_concurrent_sends=4):
        return NotificationDispatcher(
            PreferenceService(self.preference_repository),
            InAppTransport(self.notifications, self.users),
            transports,
            self.notifications,
            max_concurrent_sends=max_concurrent_sends,
        )

    def completed_event(self, *recipient_ids) -> NotificationEvent:
        return NotificationEvent(
            type=NotificationType.TASK_COMPLETED,
            recipient_ids=list(recipient_ids),
            title="Task Completed",
            message='The task "{task_title}" has been marked as completed.',
            data={"task_title": "Ship release"},
            action_url="/task/t-1",
            related_id="t-1",
        )


class TestDispatchInApp(DispatcherTestCase):
    def test_writes_one_rendered_notification_per_recipient(self):
        first, second = self.users.add(), self.users.add()

        outcome = self.dispatcher.dispatch(self.completed_event(first, second))

        self.assertEqual(outcome.delivered_count, 2)
        self.assertEqual(len(self.notifications.rows), 2)
        stored = self.notifications.for_user(first)[0]
        self.assertEqual(
            stored.message, 'The task "Ship release" has been marked as completed.'
        )
        self.assertEqual(stored.action_url, "/task/t-1")
        self.assertEqual(stored.related_id, "t-1")

    def test_unknown_recipient_does_not_block_the_others(self):
        known = [self.users.add() for _ in range(3)]
        unknown = uuid4()

        outcome = self.dispatcher.dispatch(
            self.completed_event(known[0], unknown, known[1], known[2])
        )

        self.assertEqual(outcome.delivered_count, 3)
        self.assertEqual(outcome.skipped_recipients, [unknown])
        for user_id in known:
            self.assertEqual(len(self.notifications.for_user(user_id)), 1)
        skipped = outcome.for_recipient(unknown)
        self.assertIsNone(skipped.notification_id)
        self.assertEqual(
            skipped.result_for(DeliveryChannel.IN_APP).reason, "unknown_recipient"
        )

    def test_unknown_recipient_gets_no_external_attempts(self):
        unknown = uuid4()
        self.preference_repository.save(unknown, preferences(task_completion="all"))

        self.dispatcher.dispatch(self.completed_event(unknown))

        self.assertEqual(self.push.prepared, [])
        self.assertEqual(self.chat.prepared, [])

    def test_duplicate_recipients_are_notified_once(self):
        user_id = self.users.add()

        outcome = self.dispatcher.dispatch(self.completed_event(user_id, user_id))

        self.assertEqual(len(outcome.recipients), 1)
        self.assertEqual(len(self.notifications.for_user(user_id)), 1)

    def test_accepts_a_json_mapping(self):
        user_id = self.users.add()

        outcome = self.dispatcher.dispatch(
            {
                "type": "comment_added",
                "recipientIds": [str(user_id)],
                "title": "New Comment",
                "message": "{actor_name} commented",
                "data": {"actor_name": "Ada"},
            }
        )

        self.assertEqual(outcome.event_type, "comment_added")
        self.assertEqual(self.notifications.for_user(user_id)[0].message, "Ada commented")

    def test_malformed_event_raises_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            self.dispatcher.dispatch(
                {"type": "not_a_type", "recipientIds": [], "title": "", "message": ""}
            )

        fields = {error["loc"][0] for error in ctx.exception.errors}
        self.assertIn("type", fields)
        self.assertEqual(self.notifications.rows, {})

    def test_missing_template_key_falls_back_to_raw_template(self):
        user_id = self.users.add()
        event = self.completed_event(user_id).model_copy(update={"data": {}})

        self.dispatcher.dispatch(event)

        self.assertEqual(
            self.notifications.for_user(user_id)[0].message,
            'The task "{task_title}" has been marked as completed.',
        )


class TestDispatchChannelSelection(DispatcherTestCase):
    def test_selector_none_only_writes_in_app(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="none"))

        outcome = self.dispatcher.dispatch(self.completed_event(user_id))

        self.assertEqual(len(self.notifications.for_user(user_id)), 1)
        self.assertEqual(self.push.invocations, 0)
        self.assertEqual(self.chat.invocations, 0)
        self.assertEqual(self.email.invocations, 0)
        self.assertEqual(
            list(outcome.for_recipient(user_id).channels), [DeliveryChannel.IN_APP.value]
        )

    def test_default_preferences_only_write_in_app(self):
        user_id = self.users.add()

        self.dispatcher.dispatch(self.completed_event(user_id))

        self.assertEqual(self.push.invocations + self.chat.invocations, 0)

    def test_selector_all_uses_push_and_chat(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="all"))

        outcome = self.dispatcher.dispatch(self.completed_event(user_id))

        self.assertEqual(len(self.notifications.for_user(user_id)), 1)
        self.assertEqual(self.push.invocations, 1)
        self.assertEqual(self.chat.invocations, 1)
        self.assertEqual(self.email.invocations, 0)
        recipient = outcome.for_recipient(user_id)
        self.assertEqual(
            set(recipient.channels),
            {"IN_APP", "PUSH", "CHAT"},
        )
        self.assertTrue(all(r.is_delivered for r in recipient.channels.values()))

    def test_selector_email_only_uses_email(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="email"))

        self.dispatcher.dispatch(self.completed_event(user_id))

        self.assertEqual(self.email.invocations, 1)
        self.assertEqual(self.push.invocations + self.chat.invocations, 0)

    def test_other_categories_do_not_leak(self):
        user_id = self.users.add()
        self.preference_repository.save(
            user_id, preferences(task_completion="none", comments=ChannelSelector.ALL)
        )

        self.dispatcher.dispatch(self.completed_event(user_id))

        self.assertEqual(self.push.invocations + self.chat.invocations, 0)

    def test_rendered_message_reaches_external_channels(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="push"))

        self.dispatcher.dispatch(self.completed_event(user_id))

        _, message = self.push.delivered[0]
        self.assertEqual(message.title, "Task Completed")
        self.assertIn("Ship release", message.message)


class TestDispatchFailures(DispatcherTestCase):
    def test_missing_push_subscription_is_skipped_without_error(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="push"))
        self.push.unreachable = {user_id}
        self.push.skip_reason = NO_SUBSCRIPTION

        outcome = self.dispatcher.dispatch(self.completed_event(user_id))

        result = outcome.for_recipient(user_id).result_for(DeliveryChannel.PUSH)
        self.assertEqual(result.status, DeliveryStatus.SKIPPED.value)
        self.assertEqual(result.reason, "no_subscription")
        self.assertEqual(self.push.invocations, 0)

    def test_channel_failure_is_recorded_not_raised(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="all"))
        self.chat.result = DeliveryResult.failed("telegram down")

        outcome = self.dispatcher.dispatch(self.completed_event(user_id))

        recipient = outcome.for_recipient(user_id)
        self.assertEqual(
            recipient.result_for(DeliveryChannel.CHAT).status, DeliveryStatus.FAILED.value
        )
        self.assertTrue(recipient.result_for(DeliveryChannel.PUSH).is_delivered)
        self.assertEqual(outcome.delivered_count, 1)

    def test_crashing_transport_becomes_failed_result(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="push"))

        def explode(target, message):
            raise RuntimeError("boom")

        self.push.deliver = explode

        outcome = self.dispatcher.dispatch(self.completed_event(user_id))

        result = outcome.for_recipient(user_id).result_for(DeliveryChannel.PUSH)
        self.assertEqual(result.status, DeliveryStatus.FAILED.value)
        self.assertIn("RuntimeError", result.error)

    def test_channel_without_transport_is_skipped(self):
        dispatcher = self.build_dispatcher({DeliveryChannel.PUSH: self.push})
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="all"))

        outcome = dispatcher.dispatch(self.completed_event(user_id))

        result = outcome.for_recipient(user_id).result_for(DeliveryChannel.CHAT)
        self.assertEqual(result.reason, CHANNEL_NOT_CONFIGURED)
        self.assertEqual(self.push.invocations, 1)

    def test_every_result_is_recorded_as_a_delivery(self):
        user_id = self.users.add()
        self.preference_repository.save(user_id, preferences(task_completion="all"))

        outcome = self.dispatcher.dispatch(self.completed_event(user_id))

        notification_id = outcome.for_recipient(user_id).notification_id
        self.assertEqual(
            {channel for nid, channel in self.notifications.deliveries if nid == notification_id},
            {"IN_APP", "PUSH", "CHAT"},
        )


class TestDispatchConcurrency(DispatcherTestCase):
    def test_each_channel_attempted_once_for_many_recipients(self):
        recipients = [self.users.add() for _ in range(25)]
        for user_id in recipients:
            self.preference_repository.save(user_id, preferences(task_completion="all"))
        dispatcher = self.build_dispatcher(
            {DeliveryChannel.PUSH: self.push, DeliveryChannel.CHAT: self.chat},
            max_concurrent_sends=3,
        )

        outcome = dispatcher.dispatch(self.completed_event(*recipients))

        self.assertEqual(outcome.delivered_count, 25)
        self.assertEqual(sorted(t for t, _ in self.push.delivered), sorted(recipients))
        self.assertEqual(sorted(t for t, _ in self.chat.delivered), sorted(recipients))
