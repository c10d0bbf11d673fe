"""Push subscription persistence."""

from uuid import UUID

from core.models import PushSubscription
from core.schemas.push import PushSubscriptionRecord


class DjangoPushSubscriptionRepository:
    """One subscription row per user; re-registering replaces it."""

    def get(self, user_id: UUID) -> PushSubscriptionRecord | None:
        subscription = PushSubscription.objects.filter(user_id=user_id).first()
        if subscription is None:
            return None
        return PushSubscriptionRecord.model_validate(subscription)

    def save(
        self, user_id: UUID, endpoint: str, p256dh: str, auth: str
    ) -> PushSubscriptionRecord:
        subscription, _ = PushSubscription.objects.update_or_create(
            user_id=user_id,
            defaults={"endpoint": endpoint, "p256dh": p256dh, "auth": auth},
        )
        return PushSubscriptionRecord.model_validate(subscription)

    def delete(self, user_id: UUID) -> bool:
        deleted, _ = PushSubscription.objects.filter(user_id=user_id).delete()
        return deleted > 0
