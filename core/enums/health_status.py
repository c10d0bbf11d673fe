"""Health status of a dependency checked by the readiness probe."""

from enum import Enum


class HealthStatus(str, Enum):
    """Health status enumeration for engine dependencies."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    NOT_CONFIGURED = "not_configured"
    ERROR = "error"
