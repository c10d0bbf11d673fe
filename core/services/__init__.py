"""Services for the core app."""

from core.services.email_service import EmailService
from core.services.health_service import HealthService, health_service

# Note: the engine is not exported here to avoid importing the ORM-backed
# repositories during Django app initialization. Import from the module.

__all__ = [
    "EmailService",
    "HealthService",
    "health_service",
]
