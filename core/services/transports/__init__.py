"""Channel transports: in-app, Web Push, Telegram chat and email."""

from core.services.transports.base import ChannelTransport
from core.services.transports.chat_transport import ChatTransport
from core.services.transports.email_transport import EmailTransport
from core.services.transports.in_app_transport import InAppTransport
from core.services.transports.push_transport import PushTransport

__all__ = [
    "ChannelTransport",
    "ChatTransport",
    "EmailTransport",
    "InAppTransport",
    "PushTransport",
]
