"""Unit tests for the notification read-model."""

from uuid import uuid4

import pytest

from core.enums import NotificationType
from core.exceptions.notification_exceptions import (
    NotificationNotFoundError,
    ValidationError,
)
from core.schemas.notification import NotificationDraft
from core.services.read_model import (
    NotificationReadModel,
    clamp_page_size,
    decode_cursor,
    encode_cursor,
)
from tests.fakes import FakeClock, InMemoryNotificationRepository


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository(clock):
    return InMemoryNotificationRepository(clock)


@pytest.fixture
def read_model(repository, clock):
    return NotificationReadModel(repository, clock=clock)


def create(repository, clock, user_id, count=1, same_instant=False):
    records = []
    for i in range(count):
        if not same_instant:
            clock.advance(seconds=1)
        records.append(
            repository.create(
                NotificationDraft(
                    user_id=user_id,
                    notification_type=NotificationType.COMMENT_ADDED,
                    title=f"Notification {i}",
                    message="body",
                )
            )
        )
    return records


class TestUnreadCount:
    def test_counts_unread_after_marking_some_read(self, read_model, repository, clock):
        user_id = uuid4()
        records = create(repository, clock, user_id, count=5)

        read_model.mark_read(user_id, records[0].notification_id)
        read_model.mark_read(user_id, records[3].notification_id)

        assert read_model.unread_count(user_id) == 3

    def test_other_users_notifications_are_not_counted(
        self, read_model, repository, clock
    ):
        user_id = uuid4()
        create(repository, clock, user_id, count=2)
        create(repository, clock, uuid4(), count=4)

        assert read_model.unread_count(user_id) == 2


class TestMarkRead:
    def test_marking_twice_is_idempotent(self, read_model, repository, clock):
        user_id = uuid4()
        (record,) = create(repository, clock, user_id)

        read_model.mark_read(user_id, record.notification_id)
        read_model.mark_read(user_id, record.notification_id)

        assert repository.rows[record.notification_id].is_read is True

    def test_foreign_notification_is_not_found(self, read_model, repository, clock):
        (record,) = create(repository, clock, uuid4())

        with pytest.raises(NotificationNotFoundError):
            read_model.mark_read(uuid4(), record.notification_id)

        assert repository.rows[record.notification_id].is_read is False

    def test_missing_notification_is_not_found(self, read_model):
        with pytest.raises(NotificationNotFoundError):
            read_model.mark_read(uuid4(), uuid4())


class TestMarkAllRead:
    def test_marks_every_unread_notification(self, read_model, repository, clock):
        user_id = uuid4()
        create(repository, clock, user_id, count=4)

        assert read_model.mark_all_read(user_id) == 4
        assert read_model.unread_count(user_id) == 0

    def test_notifications_created_after_the_call_started_stay_unread(
        self, read_model, repository, clock
    ):
        user_id = uuid4()
        records = create(repository, clock, user_id, count=3)
        # The call starts between the first and second notification
        clock.now = records[0].created_at

        assert read_model.mark_all_read(user_id) == 1
        assert read_model.unread_count(user_id) == 2


class TestList:
    def test_newest_first_with_cursor_paging(self, read_model, repository, clock):
        user_id = uuid4()
        records = create(repository, clock, user_id, count=5)
        expected = [r.notification_id for r in reversed(records)]

        first = read_model.list(user_id, page_size=2)
        second = read_model.list(user_id, cursor=first.next_cursor, page_size=2)
        third = read_model.list(user_id, cursor=second.next_cursor, page_size=2)

        seen = [
            n.notification_id
            for page in (first, second, third)
            for n in page.notifications
        ]
        assert seen == expected
        assert first.has_more and second.has_more
        assert not third.has_more
        assert third.next_cursor is None

    def test_ties_on_created_at_are_broken_by_id(self, read_model, repository, clock):
        user_id = uuid4()
        records = create(repository, clock, user_id, count=4, same_instant=True)

        first = read_model.list(user_id, page_size=3)
        second = read_model.list(user_id, cursor=first.next_cursor, page_size=3)

        ids = [n.notification_id for n in first.notifications + second.notifications]
        assert sorted(ids) == sorted(r.notification_id for r in records)
        assert len(set(ids)) == 4

    def test_unread_only_filter(self, read_model, repository, clock):
        user_id = uuid4()
        records = create(repository, clock, user_id, count=3)
        read_model.mark_read(user_id, records[1].notification_id)

        page = read_model.list(user_id, unread_only=True)

        assert {n.notification_id for n in page.notifications} == {
            records[0].notification_id,
            records[2].notification_id,
        }

    def test_invalid_cursor_is_a_validation_error(self, read_model):
        with pytest.raises(ValidationError):
            read_model.list(uuid4(), cursor="not-a-cursor")

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(None, 20), (0, 1), (-5, 1), (50, 50), (1000, 100)],
    )
    def test_page_size_is_clamped(self, requested, expected):
        assert clamp_page_size(requested) == expected

    def test_cursor_round_trip(self, repository, clock):
        (record,) = create(repository, clock, uuid4())

        assert decode_cursor(encode_cursor(record)) == (
            record.created_at,
            record.notification_id,
        )
