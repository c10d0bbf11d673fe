"""Schemas for the core app."""

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.notification import (
    DeliveryResult,
    DispatchOutcome,
    NotificationEvent,
    NotificationPage,
    NotificationRecord,
    RenderedMessage,
)
from core.schemas.preferences import NotificationPreferencesSchema
from core.schemas.user import UserRecord

__all__ = [
    "BaseSchemaModel",
    "DeliveryResult",
    "DependencyHealth",
    "DispatchOutcome",
    "LivenessResponse",
    "NotificationEvent",
    "NotificationPage",
    "NotificationPreferencesSchema",
    "NotificationRecord",
    "ReadinessResponse",
    "RenderedMessage",
    "UserRecord",
]
