"""Wiring of repositories, transports and services into one engine.

The engine is built once per process from ``ChannelConfig``; views and jobs
obtain it through ``get_engine()``.
"""

from dataclasses import dataclass
from functools import lru_cache

import structlog

from core.config import ChannelConfig
from core.enums import DeliveryChannel
from core.repositories import (
    DjangoChatLinkRepository,
    DjangoNotificationRepository,
    DjangoPreferenceRepository,
    DjangoPushSubscriptionRepository,
    DjangoUserRepository,
)
from core.schemas.notification import EventSubmissionResponse, NotificationEvent
from core.services.chat_link_service import ChatLinkService
from core.services.chat_webhook_service import ChatWebhookService
from core.services.dispatcher import NotificationDispatcher
from core.services.downstream.telegram_client import TelegramBotClient
from core.services.email_service import EmailService
from core.services.preference_service import PreferenceService
from core.services.push_service import PushService
from core.services.read_model import NotificationReadModel
from core.services.transports import (
    ChannelTransport,
    ChatTransport,
    EmailTransport,
    InAppTransport,
    PushTransport,
)

logger = structlog.get_logger(__name__)


@dataclass
class NotificationEngine:
    """Everything the API and the workers need, built once."""

    config: ChannelConfig
    dispatcher: NotificationDispatcher
    preferences: PreferenceService
    read_model: NotificationReadModel
    chat_links: ChatLinkService
    chat_webhook: ChatWebhookService
    push: PushService
    telegram: TelegramBotClient

    def submit(self, events: list[NotificationEvent]) -> EventSubmissionResponse:
        """Dispatch events inline, or queue them when async dispatch is on."""
        if not events:
            return EventSubmissionResponse()

        if self.config.dispatch_async:
            # Imported here: the job module resolves the engine at run time
            from core.jobs.dispatch_jobs import enqueue_dispatch

            job_ids = [enqueue_dispatch(event) for event in events]
            return EventSubmissionResponse(queued=True, job_ids=job_ids)

        return EventSubmissionResponse(
            outcomes=[self.dispatcher.dispatch(event) for event in events]
        )


def build_engine(config: ChannelConfig) -> NotificationEngine:
    """Build the engine and its channel transports from ``config``."""
    users = DjangoUserRepository()
    notifications = DjangoNotificationRepository()
    chat_links = DjangoChatLinkRepository()
    subscriptions = DjangoPushSubscriptionRepository()

    telegram = TelegramBotClient(
        base_url=config.telegram_api_base_url,
        bot_token=config.telegram_bot_token,
        timeout=config.transport_timeout,
    )
    push_transport = PushTransport(
        subscriptions,
        vapid_private_key=config.vapid_private_key,
        vapid_claims_email=config.vapid_claims_email,
        timeout=config.transport_timeout,
    )
    transports: dict[DeliveryChannel, ChannelTransport] = {
        DeliveryChannel.PUSH: push_transport,
        DeliveryChannel.CHAT: ChatTransport(
            chat_links,
            telegram,
            frontend_base_url=config.frontend_base_url,
            max_message_length=config.chat_message_max_length,
        ),
        DeliveryChannel.EMAIL: EmailTransport(
            users,
            EmailService(timeout=config.transport_timeout),
            frontend_base_url=config.frontend_base_url,
        ),
    }

    preferences = PreferenceService(DjangoPreferenceRepository())
    chat_link_service = ChatLinkService(
        chat_links,
        users,
        telegram,
        code_ttl_minutes=config.verification_code_ttl_minutes,
    )

    logger.info(
        "notification_engine_built",
        chat_enabled=config.chat_enabled,
        push_enabled=config.push_enabled,
        dispatch_async=config.dispatch_async,
        max_concurrent_sends=config.max_concurrent_sends,
    )
    return NotificationEngine(
        config=config,
        dispatcher=NotificationDispatcher(
            preferences,
            InAppTransport(notifications, users),
            transports,
            notifications,
            max_concurrent_sends=config.max_concurrent_sends,
        ),
        preferences=preferences,
        read_model=NotificationReadModel(notifications),
        chat_links=chat_link_service,
        chat_webhook=ChatWebhookService(chat_link_service, telegram),
        push=PushService(subscriptions, push_transport),
        telegram=telegram,
    )


@lru_cache
def get_engine() -> NotificationEngine:
    """Return the process-wide engine, building it on first use."""
    return build_engine(ChannelConfig.from_settings())


def reset_engine() -> None:
    """Drop the cached engine so the next call rebuilds it from settings."""
    get_engine.cache_clear()
