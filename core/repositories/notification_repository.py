"""Notification and delivery persistence."""

from datetime import datetime
from uuid import UUID

from django.db.models import Q
from django.utils import timezone

from core.enums import DeliveryChannel
from core.models import Notification, NotificationDelivery
from core.repositories.base import NotificationCursor
from core.schemas.notification import (
    DeliveryResult,
    NotificationDraft,
    NotificationRecord,
)


class DjangoNotificationRepository:
    """Reads and writes the ``notifications`` and ``notification_deliveries`` tables."""

    def create(self, draft: NotificationDraft) -> NotificationRecord:
        notification = Notification.objects.create(**draft.model_dump())
        return NotificationRecord.model_validate(notification)

    def list_page(
        self,
        user_id: UUID,
        before: NotificationCursor | None,
        limit: int,
        unread_only: bool = False,
    ) -> list[NotificationRecord]:
        queryset = Notification.objects.filter(user_id=user_id)
        if unread_only:
            queryset = queryset.filter(is_read=False)
        if before is not None:
            created_at, notification_id = before
            queryset = queryset.filter(
                Q(created_at__lt=created_at)
                | Q(created_at=created_at, notification_id__lt=notification_id)
            )
        rows = queryset.order_by("-created_at", "-notification_id")[:limit]
        return [NotificationRecord.model_validate(row) for row in rows]

    def count_unread(self, user_id: UUID) -> int:
        return Notification.objects.filter(user_id=user_id, is_read=False).count()

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        queryset = Notification.objects.filter(
            user_id=user_id, notification_id=notification_id
        )
        if not queryset.exists():
            return False
        queryset.filter(is_read=False).update(is_read=True, updated_at=timezone.now())
        return True

    def mark_all_read(self, user_id: UUID, created_before: datetime) -> int:
        # One conditional UPDATE; rows created after the boundary stay unread.
        return Notification.objects.filter(
            user_id=user_id, is_read=False, created_at__lte=created_before
        ).update(is_read=True, updated_at=timezone.now())

    def record_delivery(
        self,
        notification_id: UUID,
        channel: DeliveryChannel,
        result: DeliveryResult,
    ) -> None:
        NotificationDelivery.objects.update_or_create(
            notification_id=notification_id,
            channel=DeliveryChannel(channel).value,
            defaults={
                "status": result.status,
                "reason": result.reason,
                "error_message": result.error,
                "attempted_at": timezone.now(),
            },
        )
