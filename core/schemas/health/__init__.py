"""Health check schemas."""

from core.schemas.health.probes import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
