"""Channel transport configuration.

Read once from Django settings when the engine is built and passed to the
transports explicitly; transports never read settings or the environment.
"""

from typing import Any

from django.conf import settings as django_settings

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChannelConfig(BaseModel):
    """Credentials, endpoints and limits for every outbound channel."""

    model_config = ConfigDict(frozen=True)

    frontend_base_url: str = "http://localhost:3000"
    telegram_api_base_url: str = "https://api.telegram.org"
    telegram_bot_token: str = ""
    telegram_webhook_secret: str = ""
    vapid_public_key: str = ""
    vapid_private_key: str = ""
    vapid_claims_email: str = "mailto:support@worktrac.com"
    transport_timeout: float = Field(5.0, gt=0, le=60)
    max_concurrent_sends: int = Field(16, ge=1, le=64)
    chat_message_max_length: int = Field(500, ge=50, le=4000)
    verification_code_ttl_minutes: int = Field(30, ge=1, le=24 * 60)
    dispatch_async: bool = False

    @field_validator("frontend_base_url", "telegram_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("vapid_claims_email")
    @classmethod
    def ensure_mailto(cls, value: str) -> str:
        if value and not value.startswith(("mailto:", "https://")):
            return f"mailto:{value}"
        return value

    @property
    def chat_enabled(self) -> bool:
        return bool(self.telegram_bot_token)

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_private_key)

    @classmethod
    def from_settings(cls, source: Any = None) -> "ChannelConfig":
        """Build the configuration from a Django settings object.

        Args:
            source: Settings object to read; defaults to django.conf.settings.

        Returns:
            Validated channel configuration.
        """
        source = source or django_settings
        values = {
            "frontend_base_url": getattr(source, "FRONTEND_BASE_URL", None),
            "telegram_api_base_url": getattr(source, "TELEGRAM_API_BASE_URL", None),
            "telegram_bot_token": getattr(source, "TELEGRAM_BOT_TOKEN", None),
            "telegram_webhook_secret": getattr(source, "TELEGRAM_WEBHOOK_SECRET", None),
            "vapid_public_key": getattr(source, "VAPID_PUBLIC_KEY", None),
            "vapid_private_key": getattr(source, "VAPID_PRIVATE_KEY", None),
            "vapid_claims_email": getattr(source, "VAPID_CLAIMS_EMAIL", None),
            "transport_timeout": getattr(source, "NOTIFICATION_TRANSPORT_TIMEOUT", None),
            "max_concurrent_sends": getattr(
                source, "NOTIFICATION_MAX_CONCURRENT_SENDS", None
            ),
            "chat_message_max_length": getattr(source, "CHAT_MESSAGE_MAX_LENGTH", None),
            "verification_code_ttl_minutes": getattr(
                source, "CHAT_VERIFICATION_CODE_TTL_MINUTES", None
            ),
            "dispatch_async": getattr(source, "NOTIFICATION_DISPATCH_ASYNC", None),
        }
        return cls(**{key: value for key, value in values.items() if value is not None})
