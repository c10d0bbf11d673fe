"""Django application configuration for core."""

from django.apps import AppConfig

import structlog

logger = structlog.get_logger(__name__)


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self) -> None:
        """Validate channel configuration when Django app is ready.

        Invalid channel settings fail startup instead of the first dispatch.
        """
        from core.config import ChannelConfig  # noqa: PLC0415

        config = ChannelConfig.from_settings()
        logger.info(
            "channel_configuration_loaded",
            chat_enabled=config.chat_enabled,
            push_enabled=config.push_enabled,
            dispatch_async=config.dispatch_async,
        )
