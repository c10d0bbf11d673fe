"""Builds notification events for task lifecycle changes."""

from collections.abc import Iterable
from typing import Any
from uuid import UUID

import structlog

from core.constants import DEFAULT_ACTOR_NAME
from core.schemas.events import (
    ActorRef,
    CommentAddedRequest,
    TaskAssignedRequest,
    TaskCompletedRequest,
    TaskRef,
    TaskReviewedRequest,
)
from core.schemas.notification import NotificationEvent
from core.services.notification_templates import build_event

logger = structlog.get_logger(__name__)


def actor_name(actor: ActorRef) -> str:
    return actor.name or DEFAULT_ACTOR_NAME


def recipients_except(candidates: Iterable[UUID], *excluded: UUID) -> list[UUID]:
    """Candidates without the excluded users, first occurrence order kept."""
    skip = set(excluded)
    return [user_id for user_id in dict.fromkeys(candidates) if user_id not in skip]


def task_url(task: TaskRef, tab: str | None = None) -> str:
    url = f"/task/{task.task_id}"
    return f"{url}?tab={tab}" if tab else url


class TaskEventService:
    """Turns task lifecycle changes into notification events.

    Each method returns the events to dispatch; an empty list means nobody
    needs to be told (for example the actor is the only candidate).
    """

    def task_assigned(self, request: TaskAssignedRequest) -> list[NotificationEvent]:
        """Notify new assignees, except the user who made the assignment."""
        recipients = recipients_except(request.assignee_ids, request.actor.user_id)
        return self._events(
            "task_assigned",
            recipients,
            request.task,
            request.actor,
            metadata={"assigned_by": str(request.actor.user_id)},
        )

    def task_completed(self, request: TaskCompletedRequest) -> list[NotificationEvent]:
        """Ask approvers to review, or tell the creator the task is done.

        Tasks requiring approval notify the approvers. Otherwise the creator
        is notified, unless the creator completed the task.
        """
        task, actor = request.task, request.actor
        if task.requires_approval:
            recipients = recipients_except(request.approver_ids, actor.user_id)
            return self._events(
                "task_approval_request",
                recipients,
                task,
                actor,
                metadata={
                    "creator_id": str(task.creator_id),
                    "completed_by": str(actor.user_id),
                },
            )

        recipients = recipients_except([task.creator_id], actor.user_id)
        return self._events(
            "task_completed",
            recipients,
            task,
            actor,
            metadata={"completed_by": str(actor.user_id)},
        )

    def task_reviewed(self, request: TaskReviewedRequest) -> list[NotificationEvent]:
        """Tell the assignees whether their task was approved or rejected."""
        recipients = recipients_except(request.task.assignee_ids, request.actor.user_id)
        metadata: dict[str, Any] = {"reviewed_by": str(request.actor.user_id)}
        if not request.approved and request.reason:
            metadata["reason"] = request.reason
        return self._events(
            "task_approved" if request.approved else "task_rejected",
            recipients,
            request.task,
            request.actor,
            metadata=metadata,
        )

    def comment_added(self, request: CommentAddedRequest) -> list[NotificationEvent]:
        """Notify assignees and the creator, except the commenter."""
        task = request.task
        recipients = recipients_except(
            [*task.assignee_ids, task.creator_id], request.actor.user_id
        )
        return self._events(
            "comment_added",
            recipients,
            task,
            request.actor,
            action_url=task_url(task, tab="updates"),
            metadata={
                "commenter_id": str(request.actor.user_id),
                "comment": request.comment,
            },
        )

    def _events(
        self,
        template_key: str,
        recipients: list[UUID],
        task: TaskRef,
        actor: ActorRef,
        action_url: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> list[NotificationEvent]:
        if not recipients:
            logger.debug(
                "task_event_without_recipients",
                template=template_key,
                task_id=task.task_id,
            )
            return []

        metadata = {"task_id": task.task_id, "task_title": task.title, **(metadata or {})}
        if task.workspace_id:
            metadata["workspace_id"] = task.workspace_id
        event = build_event(
            template_key,
            recipients,
            data={"actor_name": actor_name(actor), "task_title": task.title},
            action_url=action_url or task_url(task),
            related_id=task.task_id,
            metadata=metadata,
        )
        return [event]


task_event_service = TaskEventService()
