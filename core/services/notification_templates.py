"""Title and message templates for every kind of notification.

This module provides a centralized registry mapping template keys to the
notification type they produce and their ``str.format`` title and message
templates. Templates are filled from the event's ``data`` at dispatch time.
"""

from typing import Any, TypedDict
from uuid import UUID

from core.enums import NotificationType
from core.schemas.notification import NotificationEvent


class NotificationTemplateConfig(TypedDict):
    """Configuration for a notification template."""

    type: NotificationType
    title: str
    message: str


NOTIFICATION_TEMPLATES: dict[str, NotificationTemplateConfig] = {
    # Task lifecycle
    "task_assigned": {
        "type": NotificationType.TASK_ASSIGNED,
        "title": "New Task Assigned",
        "message": '{actor_name} assigned you to the task "{task_title}"',
    },
    "task_completed": {
        "type": NotificationType.TASK_COMPLETED,
        "title": "Task Completed",
        "message": 'The task "{task_title}" has been marked as completed.',
    },
    "task_approval_request": {
        "type": NotificationType.TASK_APPROVAL_REQUEST,
        "title": "Task Approval Required",
        "message": (
            'The task "{task_title}" has been completed and requires your approval.'
        ),
    },
    "task_approved": {
        "type": NotificationType.TASK_APPROVED,
        "title": "Task Approved",
        "message": 'The task "{task_title}" has been approved.',
    },
    "task_rejected": {
        "type": NotificationType.TASK_REJECTED,
        "title": "Task Rejected",
        "message": 'The task "{task_title}" has been rejected and needs revision.',
    },
    "comment_added": {
        "type": NotificationType.COMMENT_ADDED,
        "title": "New Comment",
        "message": '{actor_name} added a comment to the task "{task_title}".',
    },
    # Task invitations
    "task_invitation": {
        "type": NotificationType.TASK_INVITATION,
        "title": "Task Invitation",
        "message": '{actor_name} has invited you to join the task "{task_title}"',
    },
    "subtask_invitation": {
        "type": NotificationType.SUBTASK_INVITATION,
        "title": "Subtask Invitation",
        "message": (
            '{actor_name} has invited you to join the subtask "{subtask_title}" '
            'of "{task_title}"'
        ),
    },
    "task_invitation_accepted": {
        "type": NotificationType.TASK_INVITATION,
        "title": "Invitation Accepted",
        "message": (
            '{actor_name} has accepted your invitation to join the task "{task_title}"'
        ),
    },
    "subtask_invitation_accepted": {
        "type": NotificationType.TASK_INVITATION,
        "title": "Invitation Accepted",
        "message": (
            "{actor_name} has accepted your invitation to join the subtask "
            '"{subtask_title}"'
        ),
    },
    "task_invitation_declined": {
        "type": NotificationType.TASK_INVITATION,
        "title": "Invitation Declined",
        "message": (
            '{actor_name} has declined your invitation to join the task "{task_title}"'
        ),
    },
    "subtask_invitation_declined": {
        "type": NotificationType.TASK_INVITATION,
        "title": "Invitation Declined",
        "message": (
            "{actor_name} has declined your invitation to join the subtask "
            '"{subtask_title}"'
        ),
    },
    # Workspace invitations
    "workspace_invitation": {
        "type": NotificationType.WORKSPACE_INVITATION,
        "title": "Workspace Invitation",
        "message": '{actor_name} has invited you to join the workspace "{workspace_name}"',
    },
    "workspace_invitation_accepted": {
        "type": NotificationType.WORKSPACE_INVITATION,
        "title": "Invitation Accepted",
        "message": (
            "{actor_name} has accepted your invitation to join the workspace "
            '"{workspace_name}"'
        ),
    },
    "workspace_invitation_declined": {
        "type": NotificationType.WORKSPACE_INVITATION,
        "title": "Invitation Declined",
        "message": (
            "{actor_name} has declined your invitation to join the workspace "
            '"{workspace_name}"'
        ),
    },
}


def build_event(
    template_key: str,
    recipient_ids: list[UUID],
    data: dict[str, Any],
    action_url: str | None = None,
    related_id: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> NotificationEvent:
    """Build a notification event from a registered template.

    Args:
        template_key: Key in NOTIFICATION_TEMPLATES
        recipient_ids: Users to notify
        data: Values substituted into the title and message
        action_url: Relative link into the web app
        related_id: Task, subtask or workspace the notification is about
        metadata: Extra details stored with the notification

    Raises:
        KeyError: If the template key is not registered
    """
    template = NOTIFICATION_TEMPLATES[template_key]
    return NotificationEvent(
        type=template["type"],
        recipient_ids=recipient_ids,
        title=template["title"],
        message=template["message"],
        data=data,
        action_url=action_url,
        related_id=related_id,
        metadata=metadata or {},
    )
