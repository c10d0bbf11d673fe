"""Rendering of notification events into channel-specific payloads.

An event is rendered once per dispatch into a channel-neutral
``RenderedMessage``; each transport then formats that message for its wire.
"""

import re
import time
from typing import Any

import structlog

from core.enums import NotificationType
from core.schemas.notification import NotificationEvent, RenderedMessage

logger = structlog.get_logger(__name__)

DEFAULT_CHAT_HEADER = "🔔 Notification"

CHAT_HEADERS: dict[NotificationType, str] = {
    NotificationType.TASK_ASSIGNED: "📋 Task Assignment",
    NotificationType.TASK_INVITATION: "🔔 Task Invitation",
    NotificationType.SUBTASK_INVITATION: "🔔 Subtask Invitation",
    NotificationType.TASK_COMPLETED: "✅ Task Completed",
    NotificationType.TASK_APPROVAL_REQUEST: "🔍 Approval Request",
    NotificationType.TASK_APPROVED: "✅ Task Approved",
    NotificationType.TASK_REJECTED: "❌ Task Rejected",
    NotificationType.WORKSPACE_INVITATION: "🏢 Workspace Invitation",
    NotificationType.COMMENT_ADDED: "💬 New Comment",
}

# Metadata keys quoted under the chat message body, with their labels
CHAT_DETAIL_FIELDS = (("comment", "Comment"), ("reason", "Reason"))

_MARKDOWN_SPECIAL = re.compile(r"([_*`\[])")


def fill_template(template: str, data: dict[str, Any]) -> str:
    """Substitute ``{placeholders}`` from ``data``.

    A template that cannot be filled is used verbatim rather than failing
    the dispatch.
    """
    if not data:
        return template
    try:
        return template.format(**data)
    except (KeyError, IndexError, ValueError) as e:
        logger.warning(
            "notification_template_fallback",
            template=template,
            error=str(e),
        )
        return template


def render_event(event: NotificationEvent) -> RenderedMessage:
    """Render an event's title and message templates."""
    return RenderedMessage(
        notification_type=event.type,
        title=fill_template(event.title, event.data),
        message=fill_template(event.message, event.data),
        action_url=event.action_url,
        related_id=event.related_id,
        metadata=event.metadata,
    )


def absolute_url(frontend_base_url: str, action_url: str | None) -> str | None:
    """Resolve a relative action URL against the web app's base URL."""
    if not action_url:
        return None
    if action_url.startswith(("http://", "https://")):
        return action_url
    return f"{frontend_base_url.rstrip('/')}/{action_url.lstrip('/')}"


def escape_markdown(text: str) -> str:
    """Escape Telegram legacy Markdown control characters."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def truncate(text: str, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters, marking the cut with '...'."""
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + "..."


def format_chat_message(
    message: RenderedMessage, max_length: int, frontend_base_url: str
) -> str:
    """Format a message as Telegram Markdown.

    Layout: emoji header, bold title, truncated body, quoted comment or
    rejection reason when present, and a link back into the app.
    """
    header = DEFAULT_CHAT_HEADER
    if message.notification_type:
        header = CHAT_HEADERS.get(
            NotificationType(message.notification_type), DEFAULT_CHAT_HEADER
        )
    lines = [
        header,
        "",
        f"*{escape_markdown(message.title)}*",
        escape_markdown(truncate(message.message, max_length)),
    ]

    for key, label in CHAT_DETAIL_FIELDS:
        value = message.metadata.get(key)
        if value:
            lines.append("")
            lines.append(f"_{label}:_ {escape_markdown(truncate(str(value), max_length))}")

    link = absolute_url(frontend_base_url, message.action_url)
    if link:
        lines.append("")
        lines.append(f"[View in WorkTrac]({link})")

    return "\n".join(lines)


def format_push_payload(message: RenderedMessage) -> dict[str, Any]:
    """Build the JSON payload the service worker displays."""
    return {
        "title": message.title,
        "message": message.message,
        "actionUrl": message.action_url or "/",
        "timestamp": int(time.time() * 1000),
    }


def email_context(message: RenderedMessage, frontend_base_url: str) -> dict[str, Any]:
    """Template context for the notification email."""
    return {
        "title": message.title,
        "message": message.message,
        "action_url": absolute_url(frontend_base_url, message.action_url),
        "comment": message.metadata.get("comment"),
        "reason": message.metadata.get("reason"),
        "settings_url": absolute_url(frontend_base_url, "/settings/notifications"),
    }
