"""Chat link persistence with race-safe code issuance and consumption."""

from datetime import datetime
from uuid import UUID

from django.db import IntegrityError, transaction

from core.models import ChatLink
from core.schemas.chat import ChatLinkRecord


class DjangoChatLinkRepository:
    """Stores ChatLink rows.

    Outstanding codes are unique across users (partial unique constraint);
    consumption is a conditional UPDATE keyed on (user, code) so exactly one
    webhook call can win a given code.
    """

    def get(self, user_id: UUID) -> ChatLinkRecord | None:
        link = ChatLink.objects.filter(user_id=user_id).first()
        if link is None:
            return None
        return ChatLinkRecord.model_validate(link)

    def store_code(
        self, user_id: UUID, code: str, expires_at: datetime, now: datetime
    ) -> bool:
        try:
            with transaction.atomic():
                clash = (
                    ChatLink.objects.select_for_update()
                    .filter(verification_code=code, code_expires_at__gt=now)
                    .exclude(user_id=user_id)
                    .exists()
                )
                if clash:
                    return False
                # Release the code from holders whose copy already expired
                ChatLink.objects.filter(
                    verification_code=code, code_expires_at__lte=now
                ).exclude(user_id=user_id).update(
                    verification_code=None, code_expires_at=None
                )
                ChatLink.objects.update_or_create(
                    user_id=user_id,
                    defaults={
                        "verification_code": code,
                        "code_expires_at": expires_at,
                    },
                )
        except IntegrityError:
            # Concurrent issuance of the same code to another user
            return False
        return True

    def consume_code(self, code: str, chat_id: str, now: datetime) -> UUID | None:
        with transaction.atomic():
            link = (
                ChatLink.objects.select_for_update()
                .filter(verification_code=code, code_expires_at__gt=now)
                .first()
            )
            if link is None:
                return None
            updated = ChatLink.objects.filter(
                user_id=link.user_id, verification_code=code
            ).update(
                chat_id=chat_id,
                linked=True,
                verification_code=None,
                code_expires_at=None,
                updated_at=now,
            )
        return link.user_id if updated else None

    def delete(self, user_id: UUID) -> bool:
        deleted, _ = ChatLink.objects.filter(user_id=user_id).delete()
        return deleted > 0
