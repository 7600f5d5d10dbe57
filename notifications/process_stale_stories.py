"""
CLI script for reminding people about stories stuck in acceptance.

Usage:
    # Run once (what the scheduler does)
    uv run python -m notifications.process_stale_stories

    # Dry run (fetch and filter, but print messages instead of sending)
    uv run python -m notifications.process_stale_stories --dry-run
"""

import argparse
from datetime import datetime, timezone
from typing import List, Optional

from slack_sdk import WebClient

from ingest.clubhouse import ClubhouseClient
from ingest.slack_users import fetch_slack_users
from models.notification import NotificationSummary, WorkflowStateNotFound
from models.tracking import Story
from notifications.stale_story_notifier import notify_stale_stories
from processing.filters import (
    projects_for_team,
    stories_for_requesters,
    stories_in_workflow_state,
    stories_older_than_threshold,
    users_for_emails,
    workflow_state_for_team_with_name,
)
from shared.clients import get_clubhouse_client, get_slack_client
from shared.errors import WorkflowStateNotFoundError
from shared.settings import NotifierSettings, load_settings


def run(
    settings: NotifierSettings,
    clubhouse: ClubhouseClient,
    slack_client: WebClient,
    now: Optional[datetime] = None,
    dry_run: bool = False,
) -> NotificationSummary:
    """
    Find stale stories in acceptance and notify their requesters.

    Every step runs in order and any failure aborts the run before a
    single message is sent. Delivery failures are the exception: all
    recipients are attempted before DeliveryError is raised.

    Args:
        settings: Run settings
        clubhouse: Clubhouse API client
        slack_client: Slack WebClient
        now: Reference time for staleness. Defaults to current UTC time.
        dry_run: If True, print messages instead of sending them

    Returns:
        NotificationSummary for the notification step

    Raises:
        FetchError: If any Clubhouse or Slack fetch fails
        WorkflowStateNotFoundError: If the team has no acceptance state
        DeliveryError: If any direct message failed to send
    """
    if now is None:
        now = datetime.now(timezone.utc)

    print(f"[{datetime.now()}] Starting stale story check for team {settings.team_id}...")

    slack_users = fetch_slack_users(slack_client)
    print(f"Found {len(slack_users)} slack users")

    allowlisted_slack_users = users_for_emails(slack_users, settings.allowlisted_emails)
    print(f"Found {len(allowlisted_slack_users)} allowlisted slack users")

    clubhouse_users = clubhouse.fetch_members()
    print(f"Found {len(clubhouse_users)} clubhouse users")

    allowlisted_clubhouse_users = users_for_emails(
        clubhouse_users, settings.allowlisted_emails
    )
    print(f"Found {len(allowlisted_clubhouse_users)} allowlisted clubhouse users")

    workflows = clubhouse.fetch_workflows()

    lookup = workflow_state_for_team_with_name(
        workflows, settings.team_id, settings.acceptance_state_name
    )
    if isinstance(lookup, WorkflowStateNotFound):
        raise WorkflowStateNotFoundError(lookup.team_id, lookup.name)
    acceptance_state = lookup.state

    projects = clubhouse.fetch_projects()
    team_projects = projects_for_team(projects, settings.team_id)
    print(f"Found {len(team_projects)} projects for team")

    stories: List[Story] = []
    for project in team_projects:
        stories.extend(clubhouse.fetch_stories(project.id))
    print(f"Found {len(stories)} stories")

    stories_in_acceptance = stories_in_workflow_state(stories, acceptance_state)
    print(f"Found {len(stories_in_acceptance)} stories in acceptance")

    allowlisted_stories = stories_for_requesters(
        stories_in_acceptance, allowlisted_clubhouse_users
    )
    print(f"Found {len(allowlisted_stories)} stories in acceptance for allowlisted users")

    stale_stories = stories_older_than_threshold(
        allowlisted_stories, settings.stale_threshold_hours, now=now
    )
    print(f"Found {len(stale_stories)} old stories in acceptance")

    return notify_stale_stories(
        slack_client,
        stale_stories,
        allowlisted_clubhouse_users,
        allowlisted_slack_users,
        settings,
        now=now,
        dry_run=dry_run,
    )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Message people whose Clubhouse stories are stuck in acceptance"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't actually send Slack messages)",
    )

    args = parser.parse_args()

    settings = load_settings()
    run(
        settings,
        get_clubhouse_client(settings),
        get_slack_client(settings),
        dry_run=args.dry_run,
    )


if __name__ == "__main__":
    main()
