"""Task lifecycle events reported by the task-management platform."""

from uuid import UUID

from pydantic import Field

from core.constants import MAX_RECIPIENTS_PER_EVENT
from core.schemas.base_schema_model import BaseSchemaModel


class ActorRef(BaseSchemaModel):
    """User who caused the event."""

    user_id: UUID = Field(..., description="Acting user")
    name: str | None = Field(None, max_length=255, description="Display name")


class TaskRef(BaseSchemaModel):
    """The task an event concerns."""

    task_id: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    creator_id: UUID = Field(..., description="User who created the task")
    assignee_ids: list[UUID] = Field(
        default_factory=list, max_length=MAX_RECIPIENTS_PER_EVENT
    )
    requires_approval: bool = Field(
        False, description="Completion must be approved by a manager"
    )
    workspace_id: str | None = Field(None, max_length=255)


class TaskAssignedRequest(BaseSchemaModel):
    task: TaskRef
    actor: ActorRef
    assignee_ids: list[UUID] = Field(
        ..., min_length=1, max_length=MAX_RECIPIENTS_PER_EVENT
    )


class TaskCompletedRequest(BaseSchemaModel):
    """A task was marked complete.

    ``approver_ids`` are the workspace owners, admins and managers; the
    platform resolves them since workspace membership lives there.
    """

    task: TaskRef
    actor: ActorRef
    approver_ids: list[UUID] = Field(
        default_factory=list, max_length=MAX_RECIPIENTS_PER_EVENT
    )


class TaskReviewedRequest(BaseSchemaModel):
    task: TaskRef
    actor: ActorRef
    approved: bool
    reason: str | None = Field(None, max_length=1000)


class CommentAddedRequest(BaseSchemaModel):
    task: TaskRef
    actor: ActorRef
    comment: str = Field(..., min_length=1, max_length=5000)
