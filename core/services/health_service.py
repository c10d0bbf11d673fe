"""Health check service with cached dependency checks."""

import logging
import time

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from core.config import ChannelConfig
from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cached: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive)."""
        return LivenessResponse(status="alive")

    def get_readiness_status(
        self, config: ChannelConfig | None = None
    ) -> ReadinessResponse:
        """Get readiness status with database, Redis and channel checks.

        Returns degraded (ready=True, degraded=True) when the database or
        Redis is down. Channels without credentials are reported as
        not configured and never degrade the engine.

        Args:
            config: Channel configuration; read from settings when omitted

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        config = config or ChannelConfig.from_settings()
        db_health = self.check_database_health()
        redis_health = self.check_redis_health()

        dependencies = {
            "database": db_health,
            "redis": redis_health,
            "chat": self._channel_health("Telegram bot", config.chat_enabled),
            "push": self._channel_health("Web Push", config.push_enabled),
        }

        degraded = not (db_health.healthy and redis_health.healthy)
        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity with caching.

        Uses Django's ensure_connection() for efficient socket validation
        without executing queries.
        """
        cached = self._from_cache("database")
        if cached is not None:
            return cached

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=self._elapsed_ms(start_time),
            )
        except OperationalError as e:
            logger.warning(f"Database health check failed: {e}")
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=self._elapsed_ms(start_time),
            )

        return self._store("database", health)

    def check_redis_health(self) -> DependencyHealth:
        """Check Redis connectivity with a round trip through the cache."""
        cached = self._from_cache("redis")
        if cached is not None:
            return cached

        start_time = time.perf_counter()
        try:
            test_key = "__health_check__"
            cache.set(test_key, "ok", timeout=1)
            result = cache.get(test_key)
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Redis connection failed: {e!s}",
                response_time_ms=self._elapsed_ms(start_time),
            )
            return self._store("redis", health)

        if result == "ok":
            health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Redis connection successful",
                response_time_ms=self._elapsed_ms(start_time),
            )
        else:
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message="Redis health check failed: unexpected result",
                response_time_ms=self._elapsed_ms(start_time),
            )
        return self._store("redis", health)

    @staticmethod
    def _channel_health(name: str, configured: bool) -> DependencyHealth:
        if configured:
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message=f"{name} credentials configured",
            )
        return DependencyHealth(
            healthy=False,
            status=HealthStatus.NOT_CONFIGURED,
            message=f"{name} credentials not configured; sends are skipped",
        )

    def _from_cache(self, key: str) -> DependencyHealth | None:
        entry = self._cached.get(key)
        if entry is None:
            return None
        checked_at, health = entry
        if time.time() - checked_at >= self.cache_ttl_seconds:
            return None
        return health

    def _store(self, key: str, health: DependencyHealth) -> DependencyHealth:
        self._cached[key] = (time.time(), health)
        return health

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000


# Global health service instance
health_service = HealthService()
