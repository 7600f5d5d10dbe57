"""
Filter and join steps for the stale story pipeline.

Every function returns a new list that keeps the relative order of its
primary input. Matching is exact equality on ids, team ids and emails (no
case folding or whitespace trimming) and nothing is deduplicated.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence, TypeVar

from models.chat import ChatUser
from models.notification import (
    WorkflowStateFound,
    WorkflowStateLookup,
    WorkflowStateNotFound,
)
from models.tracking import Project, Story, TrackingUser, Workflow, WorkflowState
from shared.utils import as_utc_if_naive

UserT = TypeVar("UserT", TrackingUser, ChatUser)


def users_for_emails(users: Sequence[UserT], allowlist: Iterable[str]) -> list[UserT]:
    """Keep users whose email exactly equals an allowlist entry."""
    allowed = list(allowlist)
    return [user for user in users if any(user.email == email for email in allowed)]


def workflow_state_for_team_with_name(
    workflows: Sequence[Workflow], team_id: int, name: str
) -> WorkflowStateLookup:
    """
    Find a team's workflow state by name.

    Only the first workflow belonging to the team is searched; its first
    state whose name matches exactly wins.

    Args:
        workflows: All workflows in the workspace
        team_id: Team whose workflow should be searched
        name: Exact workflow state name, e.g. "In Acceptance"

    Returns:
        WorkflowStateFound with the state, or WorkflowStateNotFound
    """
    for workflow in workflows:
        if workflow.team_id != team_id:
            continue

        for state in workflow.states:
            if state.name == name:
                return WorkflowStateFound(state=state)
        break

    return WorkflowStateNotFound(team_id=team_id, name=name)


def projects_for_team(projects: Sequence[Project], team_id: int) -> list[Project]:
    """Keep projects owned by the team."""
    return [project for project in projects if project.team_id == team_id]


def stories_in_workflow_state(
    stories: Sequence[Story], state: WorkflowState
) -> list[Story]:
    """Keep stories currently in the given workflow state."""
    return [story for story in stories if story.workflow_state_id == state.id]


def stories_for_requesters(
    stories: Sequence[Story], allowed_users: Sequence[TrackingUser]
) -> list[Story]:
    """Keep stories requested by any of the allowed users."""
    return [
        story
        for story in stories
        if any(user.id == story.requester_id for user in allowed_users)
    ]


def stories_for_user(stories: Sequence[Story], user: TrackingUser) -> list[Story]:
    """Keep stories requested by one user."""
    return [story for story in stories if story.requester_id == user.id]


def stories_older_than_threshold(
    stories: Sequence[Story], threshold_hours: int, now: datetime | None = None
) -> list[Story]:
    """
    Keep stories moved strictly before now minus threshold_hours.

    Stories whose moved_at can't be parsed are dropped, never kept. A naive
    now is taken to be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        now = as_utc_if_naive(now)
    cutoff = now - timedelta(hours=threshold_hours)
    return [story for story in stories if story.moved_before(cutoff)]
