"""Request bodies of the domain event endpoints."""

from core.schemas.events.invitation_events import (
    TaskInvitationRequest,
    WorkspaceInvitationRequest,
)
from core.schemas.events.task_events import (
    ActorRef,
    CommentAddedRequest,
    TaskAssignedRequest,
    TaskCompletedRequest,
    TaskRef,
    TaskReviewedRequest,
)

__all__ = [
    "ActorRef",
    "CommentAddedRequest",
    "TaskAssignedRequest",
    "TaskCompletedRequest",
    "TaskInvitationRequest",
    "TaskRef",
    "TaskReviewedRequest",
    "WorkspaceInvitationRequest",
]
