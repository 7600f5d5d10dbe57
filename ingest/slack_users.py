"""
Slack user directory fetch.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from models.chat import ChatUser
from shared.errors import FetchError

RESOURCE = "users.list"


def fetch_slack_users(client: WebClient) -> list[ChatUser]:
    """
    Fetch the workspace's users from Slack.

    Only the first page of users.list is read.

    Args:
        client: Authenticated Slack WebClient

    Returns:
        List of ChatUser with id and profile email

    Raises:
        FetchError: If the call fails or the response can't be decoded
    """
    try:
        response = client.users_list()
    except SlackApiError as e:
        raise FetchError(RESOURCE, "request", e.response.get("error", e)) from e
    except (SlackClientError, OSError) as e:
        raise FetchError(RESOURCE, "request", e) from e

    members: Any = response.get("members")
    if not isinstance(members, list):
        raise FetchError(RESOURCE, "decode", "response has no members list")

    try:
        return TypeAdapter(list[ChatUser]).validate_python(members)
    except ValidationError as e:
        raise FetchError(RESOURCE, "decode", e) from e
