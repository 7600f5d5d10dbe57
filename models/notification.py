"""Pydantic models for lookup results and notification outcomes."""

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from models.tracking import WorkflowState
from models.types import ChatUserID, TeamID


class WorkflowStateFound(BaseModel):
    """Workflow state lookup that matched."""

    model_config = ConfigDict(frozen=True)

    state: WorkflowState


class WorkflowStateNotFound(BaseModel):
    """Workflow state lookup with no match for the team and name."""

    model_config = ConfigDict(frozen=True)

    team_id: TeamID
    name: str


WorkflowStateLookup: TypeAlias = WorkflowStateFound | WorkflowStateNotFound


class DeliveryFailure(BaseModel):
    """A direct message that could not be delivered."""

    model_config = ConfigDict(frozen=True)

    recipient_id: ChatUserID
    recipient_email: str
    error: str


class NotificationSummary(BaseModel):
    """Outcome of one notification pass."""

    sent: int = 0
    skipped: int = 0
    failures: list[DeliveryFailure] = Field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)
