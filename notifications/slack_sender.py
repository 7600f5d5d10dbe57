"""
Direct message delivery via the Slack Web API.
"""

from typing import Any, Dict

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError


def send_direct_message(
    client: WebClient, user_id: str, text: str, username: str
) -> Dict[str, Any]:
    """
    Send a direct message to a Slack user.

    Args:
        client: Authenticated Slack WebClient
        user_id: Slack user ID; posting to it opens the bot's DM with the user
        text: Message body (mrkdwn)
        username: Display name for the bot

    Returns:
        Dictionary with 'success' (bool), 'ts' (str if success), 'error' (str if failed)
    """
    try:
        response = client.chat_postMessage(
            channel=user_id,
            text=text,
            username=username,
        )

        return {
            'success': True,
            'ts': response.get('ts')
        }

    except SlackApiError as e:
        return {
            'success': False,
            'error': str(e.response.get('error', e))
        }

    except (SlackClientError, OSError) as e:
        return {
            'success': False,
            'error': str(e)
        }
