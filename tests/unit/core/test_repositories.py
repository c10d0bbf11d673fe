"""Tests for the Django ORM repositories."""

from datetime import timedelta
from uuid import uuid4

from django.utils import timezone

import pytest

from core.enums import DeliveryChannel, NotificationType
from core.models import ChatLink, NotificationDelivery
from core.repositories import (
    DjangoChatLinkRepository,
    DjangoNotificationRepository,
    DjangoPreferenceRepository,
    DjangoPushSubscriptionRepository,
    DjangoUserRepository,
)
from core.schemas.notification import DeliveryResult, NotificationDraft
from core.schemas.preferences import NotificationPreferencesSchema
from tests.factories import (
    create_chat_link,
    create_notification,
    create_push_subscription,
    create_user,
)


@pytest.mark.django_db
class TestUserRepository:
    """Recipient resolution against the users table."""

    def test_returns_active_user(self):
        user = create_user(email="ada@example.com", name="Ada")

        record = DjangoUserRepository().get_user(user.user_id)

        assert record.user_id == user.user_id
        assert record.email == "ada@example.com"
        assert record.name == "Ada"

    def test_inactive_user_is_unknown(self):
        user = create_user(is_active=False)

        assert DjangoUserRepository().get_user(user.user_id) is None

    def test_missing_user_is_unknown(self):
        assert DjangoUserRepository().get_user(uuid4()) is None

    def test_blank_email_is_none(self):
        user = create_user(email="")

        assert DjangoUserRepository().get_user(user.user_id).email is None


@pytest.mark.django_db
class TestNotificationRepository:
    """Notification rows, keyset paging and read flags."""

    @pytest.fixture
    def repository(self):
        return DjangoNotificationRepository()

    @pytest.fixture
    def user(self):
        return create_user()

    def test_create_persists_draft(self, repository, user):
        record = repository.create(
            NotificationDraft(
                user_id=user.user_id,
                notification_type=NotificationType.COMMENT_ADDED,
                title="New Comment",
                message="Ada commented",
                action_url="/task/1?tab=updates",
                related_id="1",
                metadata={"comment": "Ship it"},
            )
        )

        assert record.user_id == user.user_id
        assert record.is_read is False
        assert record.metadata == {"comment": "Ship it"}
        assert record.notification_type == "comment_added"

    def test_list_page_orders_newest_first_and_pages(self, repository, user):
        now = timezone.now()
        rows = [
            create_notification(user, created_at=now - timedelta(minutes=i))
            for i in range(5)
        ]

        first = repository.list_page(user.user_id, None, 2)
        cursor = (first[-1].created_at, first[-1].notification_id)
        second = repository.list_page(user.user_id, cursor, 10)

        ids = [r.notification_id for r in first + second]
        assert ids == [row.notification_id for row in rows]

    def test_list_page_breaks_ties_by_id(self, repository, user):
        instant = timezone.now()
        rows = [create_notification(user, created_at=instant) for _ in range(3)]

        first = repository.list_page(user.user_id, None, 2)
        cursor = (first[-1].created_at, first[-1].notification_id)
        rest = repository.list_page(user.user_id, cursor, 10)

        assert sorted(r.notification_id for r in first + rest) == sorted(
            row.notification_id for row in rows
        )

    def test_list_page_unread_only(self, repository, user):
        read = create_notification(user, is_read=True)
        unread = create_notification(user)

        ids = [r.notification_id for r in repository.list_page(user.user_id, None, 10, True)]

        assert ids == [unread.notification_id]
        assert read.notification_id not in ids

    def test_mark_read_checks_ownership(self, repository, user):
        notification = create_notification(user)

        assert repository.mark_read(uuid4(), notification.notification_id) is False
        assert repository.mark_read(user.user_id, notification.notification_id) is True
        assert repository.mark_read(user.user_id, notification.notification_id) is True
        assert repository.count_unread(user.user_id) == 0

    def test_mark_all_read_respects_boundary(self, repository, user):
        boundary = timezone.now()
        create_notification(user, created_at=boundary - timedelta(seconds=5))
        create_notification(user, created_at=boundary - timedelta(seconds=1))
        create_notification(user, created_at=boundary + timedelta(seconds=1))

        assert repository.mark_all_read(user.user_id, boundary) == 2
        assert repository.count_unread(user.user_id) == 1

    def test_record_delivery_keeps_one_row_per_channel(self, repository, user):
        notification = create_notification(user)

        repository.record_delivery(
            notification.notification_id,
            DeliveryChannel.PUSH,
            DeliveryResult.failed("timeout"),
        )
        repository.record_delivery(
            notification.notification_id,
            DeliveryChannel.PUSH,
            DeliveryResult.delivered(),
        )

        deliveries = NotificationDelivery.objects.filter(
            notification_id=notification.notification_id
        )
        assert deliveries.count() == 1
        assert deliveries.get().status == "DELIVERED"


@pytest.mark.django_db
class TestPreferenceRepository:
    def test_missing_row_is_none(self):
        assert DjangoPreferenceRepository().get(create_user().user_id) is None

    def test_save_then_get_round_trips(self):
        user = create_user()
        repository = DjangoPreferenceRepository()
        values = NotificationPreferencesSchema.default().model_dump()
        values["task_approval"] = "all"
        preferences = NotificationPreferencesSchema(**values)

        repository.save(user.user_id, preferences)
        repository.save(user.user_id, preferences)

        assert repository.get(user.user_id) == preferences


@pytest.mark.django_db
class TestPushSubscriptionRepository:
    def test_save_replaces_existing_subscription(self):
        user = create_user()
        create_push_subscription(user)
        repository = DjangoPushSubscriptionRepository()

        record = repository.save(
            user.user_id, "https://push.example.com/new", "key", "auth"
        )

        assert record.endpoint == "https://push.example.com/new"
        assert repository.get(user.user_id).endpoint == "https://push.example.com/new"

    def test_delete(self):
        user = create_user()
        create_push_subscription(user)
        repository = DjangoPushSubscriptionRepository()

        assert repository.delete(user.user_id) is True
        assert repository.delete(user.user_id) is False
        assert repository.get(user.user_id) is None


@pytest.mark.django_db
class TestChatLinkRepository:
    @pytest.fixture
    def repository(self):
        return DjangoChatLinkRepository()

    def test_store_code_creates_pending_row(self, repository):
        user = create_user()
        now = timezone.now()

        assert repository.store_code(
            user.user_id, "123456", now + timedelta(minutes=30), now
        )

        link = repository.get(user.user_id)
        assert link.verification_code == "123456"
        assert link.linked is False

    def test_store_code_refuses_code_held_by_another_user(self, repository):
        holder, other = create_user(), create_user()
        now = timezone.now()
        repository.store_code(holder.user_id, "123456", now + timedelta(minutes=30), now)

        assert not repository.store_code(
            other.user_id, "123456", now + timedelta(minutes=30), now
        )
        assert repository.get(other.user_id) is None

    def test_store_code_takes_over_expired_code(self, repository):
        holder, other = create_user(), create_user()
        now = timezone.now()
        repository.store_code(holder.user_id, "123456", now - timedelta(minutes=1), now)

        assert repository.store_code(
            other.user_id, "123456", now + timedelta(minutes=30), now
        )
        assert repository.get(holder.user_id).verification_code is None

    def test_consume_code_links_once(self, repository):
        user = create_user()
        now = timezone.now()
        repository.store_code(user.user_id, "654321", now + timedelta(minutes=30), now)

        assert repository.consume_code("654321", "999", now) == user.user_id
        assert repository.consume_code("654321", "888", now) is None

        link = ChatLink.objects.get(user_id=user.user_id)
        assert link.linked is True
        assert link.chat_id == "999"
        assert link.verification_code is None

    def test_consume_expired_code_is_rejected(self, repository):
        user = create_user()
        now = timezone.now()
        repository.store_code(user.user_id, "654321", now + timedelta(minutes=30), now)

        assert repository.consume_code("654321", "999", now + timedelta(minutes=31)) is None
        assert repository.get(user.user_id).linked is False

    def test_delete_removes_link(self, repository):
        user = create_user()
        create_chat_link(user)

        assert repository.delete(user.user_id) is True
        assert repository.get(user.user_id) is None
