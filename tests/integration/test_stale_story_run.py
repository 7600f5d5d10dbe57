"""
Integration tests for the full stale story run.

Runs notifications.process_stale_stories.run() against a real
ClubhouseClient with HTTP mocked at requests.Session.get, and a mocked
Slack WebClient.
"""

import unittest
from unittest.mock import patch

import requests

from ingest.clubhouse import ClubhouseClient
from notifications.process_stale_stories import main, run
from shared.errors import DeliveryError, FetchError, WorkflowStateNotFoundError
from shared.settings import NotifierSettings
from tests.fixtures.clubhouse_factory import (
    NOW,
    create_test_member,
    create_test_project,
    create_test_slack_user,
    create_test_story,
    create_test_workflow,
    hours_ago,
)
from tests.fixtures.mock_helpers import (
    create_mock_requests_response,
    create_mock_slack_client,
    create_slack_api_error,
)

BASE_URL = "https://api.clubhouse.io/api/v2/"
ACCEPTANCE_STATE_ID = 500000004

ALICE = "alice@example.com"
BOB = "bob@example.com"
OUTSIDER = "outsider@example.com"


def _settings() -> NotifierSettings:
    return NotifierSettings(
        clubhouse_api_token="ch-token",
        slack_api_token="xoxb-token",
        team_id=5285,
        stale_threshold_hours=18,
        allowlisted_emails=(ALICE, BOB),
        clubhouse_api_base_url=BASE_URL,
        story_url_template="https://app.clubhouse.io/acme/story/{story_id}",
    )


class FakeClubhouseAPI:
    """Routes Session.get calls to canned JSON responses by resource path."""

    def __init__(self, responses):
        self.responses = responses
        self.requested = []

    def __call__(self, url, params=None, **kwargs):
        path = url[len(BASE_URL):]
        self.requested.append(path)
        response = self.responses[path]
        if isinstance(response, Exception):
            raise response
        return create_mock_requests_response(json_data=response)


def _default_responses():
    return {
        "members": [
            create_test_member(member_id="ch-alice", email=ALICE),
            create_test_member(member_id="ch-bob", email=BOB),
            create_test_member(member_id="ch-outsider", email=OUTSIDER),
        ],
        "workflows": [
            create_test_workflow(team_id=1, states=[{"id": 1, "name": "In Acceptance"}]),
            create_test_workflow(team_id=5285),
        ],
        "projects": [
            create_test_project(project_id=10, team_id=5285),
            create_test_project(project_id=20, team_id=999),
        ],
        "projects/10/stories": [
            create_test_story(
                story_id=1,
                name="Checkout flow",
                requester_id="ch-alice",
                workflow_state_id=ACCEPTANCE_STATE_ID,
                moved_at=hours_ago(20),
            ),
            create_test_story(
                story_id=2,
                name="Pricing page",
                requester_id="ch-alice",
                workflow_state_id=ACCEPTANCE_STATE_ID,
                moved_at=hours_ago(20),
            ),
            create_test_story(
                story_id=3,
                name="Someone else's story",
                requester_id="ch-outsider",
                workflow_state_id=ACCEPTANCE_STATE_ID,
                moved_at=hours_ago(20),
            ),
        ],
    }


def _slack_users():
    return [
        create_test_slack_user(user_id="U-ALICE", email=ALICE),
        create_test_slack_user(user_id="U-BOB", email=BOB),
        create_test_slack_user(user_id="U-OUTSIDER", email=OUTSIDER),
        create_test_slack_user(user_id="U-BOT", email=None, is_bot=True),
    ]


@patch("builtins.print")
@patch("notifications.stale_story_notifier.log_notification_error")
class TestStaleStoryRun(unittest.TestCase):
    """End-to-end tests for run()."""

    def setUp(self):
        self.clubhouse = ClubhouseClient(api_token="ch-token", base_url=BASE_URL)

    def _run(self, responses, slack_client):
        fake_api = FakeClubhouseAPI(responses)
        with patch("requests.Session.get", side_effect=fake_api):
            summary = run(_settings(), self.clubhouse, slack_client, now=NOW)
        return summary, fake_api

    def test_single_message_with_two_bullets(self, mock_log, mock_print):
        """Two stale stories from one allowlisted requester, one from an outsider."""
        slack_client = create_mock_slack_client(users=_slack_users())

        summary, fake_api = self._run(_default_responses(), slack_client)

        slack_client.chat_postMessage.assert_called_once()
        kwargs = slack_client.chat_postMessage.call_args.kwargs
        self.assertEqual(kwargs["channel"], "U-ALICE")
        bullets = [line for line in kwargs["text"].splitlines() if line.startswith("* ")]
        self.assertEqual(len(bullets), 2)
        self.assertIn("Checkout flow", bullets[0])
        self.assertIn("Pricing page", bullets[1])
        self.assertNotIn("Someone else's story", kwargs["text"])
        self.assertEqual(summary.sent, 1)
        self.assertEqual(summary.skipped, 1)

    def test_fetch_order_and_team_scoping(self, mock_log, mock_print):
        """Resources fetched in order, stories only for team projects."""
        slack_client = create_mock_slack_client(users=_slack_users())

        _, fake_api = self._run(_default_responses(), slack_client)

        self.assertEqual(
            fake_api.requested,
            ["members", "workflows", "projects", "projects/10/stories"],
        )
        slack_client.users_list.assert_called_once()

    def test_stories_concatenated_across_projects(self, mock_log, mock_print):
        """Each team project fetched sequentially, results combined."""
        responses = _default_responses()
        responses["projects"].append(create_test_project(project_id=11, team_id=5285))
        responses["projects/11/stories"] = [
            create_test_story(
                story_id=4,
                name="Bob's story",
                requester_id="ch-bob",
                workflow_state_id=ACCEPTANCE_STATE_ID,
                moved_at=hours_ago(30),
            )
        ]
        slack_client = create_mock_slack_client(users=_slack_users())

        summary, fake_api = self._run(responses, slack_client)

        self.assertEqual(fake_api.requested[-2:], ["projects/10/stories", "projects/11/stories"])
        channels = [c.kwargs["channel"] for c in slack_client.chat_postMessage.call_args_list]
        self.assertEqual(channels, ["U-ALICE", "U-BOB"])
        self.assertEqual(summary.sent, 2)

    def test_fresh_and_other_state_stories_ignored(self, mock_log, mock_print):
        """Stories too recent or in another state produce no message."""
        responses = _default_responses()
        responses["projects/10/stories"] = [
            create_test_story(
                story_id=1,
                requester_id="ch-alice",
                workflow_state_id=ACCEPTANCE_STATE_ID,
                moved_at=hours_ago(17),
            ),
            create_test_story(
                story_id=2,
                requester_id="ch-alice",
                workflow_state_id=500000003,
                moved_at=hours_ago(40),
            ),
            create_test_story(
                story_id=3,
                requester_id="ch-alice",
                workflow_state_id=ACCEPTANCE_STATE_ID,
                moved_at="not a timestamp",
            ),
        ]
        slack_client = create_mock_slack_client(users=_slack_users())

        summary, _ = self._run(responses, slack_client)

        slack_client.chat_postMessage.assert_not_called()
        self.assertEqual(summary.sent, 0)

    def test_missing_acceptance_state_aborts(self, mock_log, mock_print):
        """No acceptance state for the team aborts before projects are fetched."""
        responses = _default_responses()
        responses["workflows"] = [
            create_test_workflow(team_id=5285, states=[{"id": 1, "name": "Done"}])
        ]
        slack_client = create_mock_slack_client(users=_slack_users())

        with self.assertRaises(WorkflowStateNotFoundError):
            self._run(responses, slack_client)

        slack_client.chat_postMessage.assert_not_called()

    def test_fetch_failure_aborts_before_notifying(self, mock_log, mock_print):
        """A failed story fetch sends nothing."""
        responses = _default_responses()
        responses["projects/10/stories"] = requests.ConnectionError("reset by peer")
        slack_client = create_mock_slack_client(users=_slack_users())

        with self.assertRaises(FetchError) as ctx:
            self._run(responses, slack_client)

        self.assertEqual(ctx.exception.resource, "projects/10/stories")
        slack_client.chat_postMessage.assert_not_called()

    def test_slack_user_fetch_failure_aborts(self, mock_log, mock_print):
        """Slack users.list failure aborts the run."""
        slack_client = create_mock_slack_client()
        slack_client.users_list.side_effect = create_slack_api_error("invalid_auth")

        with self.assertRaises(FetchError):
            self._run(_default_responses(), slack_client)

        slack_client.chat_postMessage.assert_not_called()

    def test_delivery_failure_propagates(self, mock_log, mock_print):
        """Delivery failures surface as DeliveryError from run()."""
        slack_client = create_mock_slack_client(
            users=_slack_users(),
            post_side_effect=create_slack_api_error("channel_not_found"),
        )

        with self.assertRaises(DeliveryError) as ctx:
            self._run(_default_responses(), slack_client)

        self.assertIn("channel_not_found", str(ctx.exception))


class TestMain(unittest.TestCase):
    """Tests for the CLI entry point."""

    @patch("notifications.process_stale_stories.run")
    @patch("notifications.process_stale_stories.get_slack_client")
    @patch("notifications.process_stale_stories.get_clubhouse_client")
    @patch("notifications.process_stale_stories.load_settings")
    def test_main_wires_clients(self, mock_load, mock_clubhouse, mock_slack, mock_run):
        """main() builds settings and clients then runs once."""
        with patch("sys.argv", ["process_stale_stories", "--dry-run"]):
            main()

        mock_clubhouse.assert_called_once_with(mock_load.return_value)
        mock_slack.assert_called_once_with(mock_load.return_value)
        mock_run.assert_called_once_with(
            mock_load.return_value,
            mock_clubhouse.return_value,
            mock_slack.return_value,
            dry_run=True,
        )

    @patch("notifications.process_stale_stories.run")
    @patch("notifications.process_stale_stories.get_slack_client")
    @patch("notifications.process_stale_stories.get_clubhouse_client")
    @patch("notifications.process_stale_stories.load_settings")
    def test_main_propagates_fatal_errors(
        self, mock_load, mock_clubhouse, mock_slack, mock_run
    ):
        """Fatal errors are not swallowed."""
        mock_run.side_effect = WorkflowStateNotFoundError(5285, "In Acceptance")

        with patch("sys.argv", ["process_stale_stories"]):
            with self.assertRaises(WorkflowStateNotFoundError):
                main()


if __name__ == "__main__":
    unittest.main()
