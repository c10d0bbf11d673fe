"""Task and workspace invitation events."""

from pydantic import Field, model_validator

from core.enums import InvitationStatus
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.events.task_events import ActorRef


class TaskInvitationRequest(BaseSchemaModel):
    """Invitation to collaborate on a task, or on one of its subtasks."""

    invitation_id: str = Field(..., min_length=1, max_length=255)
    task_id: str = Field(..., min_length=1, max_length=255)
    task_title: str = Field(..., min_length=1, max_length=255)
    subtask_id: str | None = Field(None, max_length=255)
    subtask_title: str | None = Field(None, max_length=255)
    inviter: ActorRef
    invitee: ActorRef
    status: InvitationStatus = InvitationStatus.PENDING

    @model_validator(mode="after")
    def subtask_title_required(self) -> "TaskInvitationRequest":
        if self.subtask_id and not self.subtask_title:
            raise ValueError("subtaskTitle is required when subtaskId is set")
        return self

    @property
    def is_subtask(self) -> bool:
        return bool(self.subtask_id)


class WorkspaceInvitationRequest(BaseSchemaModel):
    invitation_id: str = Field(..., min_length=1, max_length=255)
    workspace_id: str = Field(..., min_length=1, max_length=255)
    workspace_name: str = Field(..., min_length=1, max_length=255)
    inviter: ActorRef
    invitee: ActorRef
    status: InvitationStatus = InvitationStatus.PENDING
