"""Pydantic models for Clubhouse (project tracking) data."""

from datetime import datetime, timedelta

from pydantic import AliasPath, BaseModel, ConfigDict, Field, field_validator

from models.types import TeamID, Timestamp, TrackingUserID
from shared.utils import as_utc_if_naive, parse_timestamp


class TrackingUser(BaseModel):
    """Clubhouse workspace member."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: TrackingUserID
    email: str = Field(
        default="", validation_alias=AliasPath("profile", "email_address")
    )

    @field_validator("email", mode="before")
    @classmethod
    def _none_email_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class Project(BaseModel):
    """Clubhouse project, owned by a single team."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    team_id: TeamID


class WorkflowState(BaseModel):
    """Named stage in a team's workflow."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Workflow(BaseModel):
    """A team's workflow with its ordered states."""

    model_config = ConfigDict(frozen=True)

    id: int
    team_id: TeamID
    states: list[WorkflowState] = Field(default_factory=list)


class Story(BaseModel):
    """Clubhouse story (work item)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    requester_id: TrackingUserID = Field(..., alias="requested_by_id")
    workflow_state_id: int
    moved_at: Timestamp = ""

    @field_validator("moved_at", mode="before")
    @classmethod
    def _none_moved_at_to_empty(cls, value: object) -> object:
        # Stories that were never moved come back with moved_at: null
        return "" if value is None else value

    def url(self, template: str) -> str:
        """Link to the story in the Clubhouse web app."""
        return template.format(story_id=self.id)

    def moved_before(self, cutoff: datetime) -> bool:
        """True if the story was moved strictly before cutoff.

        A moved_at that can't be parsed never counts as moved before.
        """
        moved_at = parse_timestamp(self.moved_at)
        if moved_at is None:
            return False
        return moved_at < as_utc_if_naive(cutoff)

    def time_since_moved(self, now: datetime) -> timedelta | None:
        moved_at = parse_timestamp(self.moved_at)
        if moved_at is None:
            return None
        return as_utc_if_naive(now) - moved_at
