"""Builds notification events for task and workspace invitations."""

import structlog

from core.enums import InvitationStatus
from core.schemas.events import TaskInvitationRequest, WorkspaceInvitationRequest
from core.schemas.notification import NotificationEvent
from core.services.notification_templates import build_event
from core.services.task_event_service import actor_name

logger = structlog.get_logger(__name__)

WORKSPACE_INVITATIONS_URL = "/"
WORKSPACE_MEMBERS_URL = "/workspace/settings?tab=members"


class InvitationEventService:
    """Turns invitation state changes into notification events.

    A pending invitation notifies the invitee; an accepted or declined one
    notifies the inviter. Expired invitations notify nobody.
    """

    def task_invitation(
        self, request: TaskInvitationRequest
    ) -> list[NotificationEvent]:
        status = InvitationStatus(request.status)
        prefix = "subtask_invitation" if request.is_subtask else "task_invitation"

        if status == InvitationStatus.PENDING:
            template_key, recipient, actor = prefix, request.invitee, request.inviter
        elif status in (InvitationStatus.ACCEPTED, InvitationStatus.DECLINED):
            template_key = f"{prefix}_{status.value}"
            recipient, actor = request.inviter, request.invitee
        else:
            logger.debug(
                "invitation_event_ignored",
                invitation_id=request.invitation_id,
                status=status.value,
            )
            return []

        if recipient.user_id == actor.user_id:
            return []

        metadata = {
            "invitation_id": request.invitation_id,
            "task_id": request.task_id,
            "task_title": request.task_title,
            "inviter_id": str(request.inviter.user_id),
        }
        if request.is_subtask:
            metadata["subtask_id"] = request.subtask_id
        return [
            build_event(
                template_key,
                [recipient.user_id],
                data={
                    "actor_name": actor_name(actor),
                    "task_title": request.task_title,
                    "subtask_title": request.subtask_title or "",
                },
                action_url=f"/task/{request.task_id}",
                related_id=request.subtask_id or request.task_id,
                metadata=metadata,
            )
        ]

    def workspace_invitation(
        self, request: WorkspaceInvitationRequest
    ) -> list[NotificationEvent]:
        status = InvitationStatus(request.status)

        if status == InvitationStatus.PENDING:
            template_key = "workspace_invitation"
            recipient, actor = request.invitee, request.inviter
            action_url = WORKSPACE_INVITATIONS_URL
        elif status in (InvitationStatus.ACCEPTED, InvitationStatus.DECLINED):
            template_key = f"workspace_invitation_{status.value}"
            recipient, actor = request.inviter, request.invitee
            action_url = WORKSPACE_MEMBERS_URL
        else:
            logger.debug(
                "invitation_event_ignored",
                invitation_id=request.invitation_id,
                status=status.value,
            )
            return []

        if recipient.user_id == actor.user_id:
            return []

        return [
            build_event(
                template_key,
                [recipient.user_id],
                data={
                    "actor_name": actor_name(actor),
                    "workspace_name": request.workspace_name,
                },
                action_url=action_url,
                related_id=request.workspace_id,
                metadata={
                    "invitation_id": request.invitation_id,
                    "workspace_id": request.workspace_id,
                    "inviter_id": str(request.inviter.user_id),
                },
            )
        ]


invitation_event_service = InvitationEventService()
