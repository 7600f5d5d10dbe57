from slack_sdk import WebClient

from ingest.clubhouse import ClubhouseClient
from shared.settings import NotifierSettings


def get_clubhouse_client(settings: NotifierSettings) -> ClubhouseClient:
    """Get initialized Clubhouse API client."""
    return ClubhouseClient(
        api_token=settings.clubhouse_api_token,
        base_url=settings.clubhouse_api_base_url,
    )


def get_slack_client(settings: NotifierSettings) -> WebClient:
    """Get initialized Slack Web API client."""
    return WebClient(token=settings.slack_api_token)
