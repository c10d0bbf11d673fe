"""User lookups against the platform's user table."""

from uuid import UUID

from core.models import User
from core.schemas.user import UserRecord


class DjangoUserRepository:
    """Resolve recipients from the ``users`` table."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        user = User.objects.filter(user_id=user_id, is_active=True).first()
        if user is None:
            return None
        return UserRecord(
            user_id=user.user_id,
            email=user.email or None,
            name=user.name,
            is_active=user.is_active,
        )
