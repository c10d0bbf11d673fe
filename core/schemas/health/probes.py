"""Liveness and readiness probe responses."""

from pydantic import BaseModel, Field

from core.enums.health_status import HealthStatus
from core.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Health of one dependency: database, cache or an outbound channel."""

    healthy: bool = Field(..., description="Whether the dependency is usable")
    status: HealthStatus = Field(..., description="Health status of the dependency")
    message: str = Field(..., description="Human-readable health message")
    response_time_ms: float | None = Field(
        None, description="Response time in milliseconds"
    )


class LivenessResponse(BaseModel):
    """Response model for liveness checks."""

    status: str = Field(..., description="Liveness status")


class ReadinessResponse(BaseModel):
    """Response model for readiness checks.

    Unconfigured channels do not make the engine degraded; dispatch records
    them as skipped.
    """

    ready: bool = Field(..., description="Engine accepts requests")
    status: str = Field(..., description="Overall status: 'ready' or 'degraded'")
    degraded: bool = Field(..., description="Whether a required dependency is down")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
