"""Email transport over the engine's SMTP EmailService."""

import smtplib
from uuid import UUID

import structlog

from core.enums import DeliveryChannel
from core.repositories.base import UserRepository
from core.schemas.notification import DeliveryResult, RenderedMessage
from core.services.email_service import EmailService
from core.services.message_formatter import email_context
from core.services.transports.base import NO_EMAIL, ChannelTransport

logger = structlog.get_logger(__name__)

NOTIFICATION_EMAIL_TEMPLATE = "emails/notification.html"


class EmailTransport(ChannelTransport):
    """Emails the notification to the recipient's account address."""

    channel = DeliveryChannel.EMAIL

    def __init__(
        self,
        users: UserRepository,
        email_service: EmailService,
        frontend_base_url: str,
    ) -> None:
        self._users = users
        self._email_service = email_service
        self._frontend_base_url = frontend_base_url

    def prepare(self, recipient_id: UUID) -> str | DeliveryResult:
        user = self._users.get_user(recipient_id)
        if user is None or not user.email:
            return DeliveryResult.skipped(NO_EMAIL)
        return user.email

    def deliver(self, target: str, message: RenderedMessage) -> DeliveryResult:
        try:
            self._email_service.send_template_email(
                to_email=target,
                subject=message.title,
                template_name=NOTIFICATION_EMAIL_TEMPLATE,
                context=email_context(message, self._frontend_base_url),
            )
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.warning("email_transport_failed", error=str(e))
            return DeliveryResult.failed(f"email not sent: {type(e).__name__}")
        return DeliveryResult.delivered()
