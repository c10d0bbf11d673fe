"""Notification read-model: the user's notification list and read state."""

import base64
import binascii
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from django.utils import timezone

import structlog

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from core.exceptions.notification_exceptions import (
    NotificationNotFoundError,
    ValidationError,
)
from core.repositories.base import NotificationCursor, NotificationRepository
from core.schemas.notification import NotificationPage, NotificationRecord

logger = structlog.get_logger(__name__)

_CURSOR_SEPARATOR = "|"


def encode_cursor(record: NotificationRecord) -> str:
    """Encode the keyset position of ``record`` as an opaque cursor."""
    raw = f"{record.created_at.isoformat()}{_CURSOR_SEPARATOR}{record.notification_id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> NotificationCursor:
    """Decode an opaque cursor.

    Raises:
        ValidationError: If the cursor was not produced by ``encode_cursor``.
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
        created_at, notification_id = raw.split(_CURSOR_SEPARATOR)
        position = (datetime.fromisoformat(created_at), UUID(notification_id))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise ValidationError(
            "Invalid cursor",
            errors=[{"loc": ["cursor"], "msg": "Malformed pagination cursor"}],
        ) from e
    return position


def clamp_page_size(page_size: int | None) -> int:
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(page_size, MAX_PAGE_SIZE))


class NotificationReadModel:
    """Lists notifications and tracks their read flags."""

    def __init__(
        self,
        repository: NotificationRepository,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def list(
        self,
        user_id: UUID,
        cursor: str | None = None,
        page_size: int | None = DEFAULT_PAGE_SIZE,
        unread_only: bool = False,
    ) -> NotificationPage:
        """Return one page of the user's notifications, newest first.

        Args:
            user_id: Owner of the notifications
            cursor: ``next_cursor`` of the previous page, or None for the first
            page_size: Requested size, clamped to 1..100
            unread_only: Only include unread notifications

        Raises:
            ValidationError: If the cursor is malformed
        """
        before = decode_cursor(cursor) if cursor else None
        limit = clamp_page_size(page_size)

        rows = self._repository.list_page(
            user_id, before, limit + 1, unread_only=unread_only
        )
        has_more = len(rows) > limit
        rows = rows[:limit]
        next_cursor = encode_cursor(rows[-1]) if has_more and rows else None

        return NotificationPage(
            notifications=rows, next_cursor=next_cursor, has_more=has_more
        )

    def unread_count(self, user_id: UUID) -> int:
        return self._repository.count_unread(user_id)

    def mark_read(self, user_id: UUID, notification_id: UUID) -> None:
        """Mark one notification read. Marking it again is a no-op.

        Raises:
            NotificationNotFoundError: If the notification does not exist or
                belongs to another user
        """
        if not self._repository.mark_read(user_id, notification_id):
            raise NotificationNotFoundError(notification_id)

    def mark_all_read(self, user_id: UUID) -> int:
        """Mark every notification that existed when the call started as read.

        Notifications created while the update runs may stay unread.
        """
        started_at = self._clock()
        updated = self._repository.mark_all_read(user_id, started_at)
        logger.info(
            "notifications_marked_read", user_id=str(user_id), updated_count=updated
        )
        return updated
