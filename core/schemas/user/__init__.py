"""User schemas."""

from core.schemas.user.user_record import UserRecord

__all__ = ["UserRecord"]
