"""Uniform interface every delivery channel implements."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from core.enums import DeliveryChannel
from core.schemas.notification import DeliveryResult, RenderedMessage

# Skip reasons recorded on DeliveryResult.reason
UNKNOWN_RECIPIENT = "unknown_recipient"
NO_SUBSCRIPTION = "no_subscription"
NOT_LINKED = "not_linked"
NO_EMAIL = "no_email"
CHANNEL_NOT_CONFIGURED = "channel_not_configured"


class ChannelTransport(ABC):
    """A delivery channel split into address resolution and sending.

    ``prepare`` reads storage and must run on the dispatching thread;
    ``deliver`` performs the network call and may run on a pool thread.
    Neither raises for channel failures: they return a DeliveryResult.
    """

    channel: DeliveryChannel

    @abstractmethod
    def prepare(self, recipient_id: UUID) -> Any:
        """Resolve the channel address of a recipient.

        Returns:
            The address to pass to ``deliver``, or a skipped DeliveryResult
            when the recipient cannot be reached on this channel.
        """

    @abstractmethod
    def deliver(self, target: Any, message: RenderedMessage) -> DeliveryResult:
        """Send ``message`` to a prepared address."""

    def send(self, recipient_id: UUID, message: RenderedMessage) -> DeliveryResult:
        """Prepare and deliver in one call on the current thread."""
        prepared = self.prepare(recipient_id)
        if isinstance(prepared, DeliveryResult):
            return prepared
        return self.deliver(prepared, message)
