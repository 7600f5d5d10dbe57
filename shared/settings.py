"""Runtime settings: fixed constants plus secrets from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from config import notifier_settings


class NotifierSettings(BaseModel):
    """Everything one notifier run needs, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    clubhouse_api_token: str = Field(..., min_length=1)
    slack_api_token: str = Field(..., min_length=1)
    team_id: int = notifier_settings.TEAM_ID
    stale_threshold_hours: int = Field(notifier_settings.STALE_THRESHOLD_HOURS, ge=0)
    acceptance_state_name: str = notifier_settings.ACCEPTANCE_STATE_NAME
    bot_username: str = notifier_settings.BOT_USERNAME
    allowlisted_emails: tuple[str, ...] = tuple(notifier_settings.ALLOWLISTED_EMAILS)
    clubhouse_api_base_url: str = notifier_settings.CLUBHOUSE_API_BASE_URL
    story_url_template: str = notifier_settings.STORY_URL_TEMPLATE


def load_settings() -> NotifierSettings:
    """Build settings from the fixed constants and environment secrets."""
    load_dotenv()

    clubhouse_token: str | None = os.getenv("CLUBHOUSE_API_TOKEN")
    slack_token: str | None = os.getenv("SLACK_API_TOKEN")

    if not clubhouse_token or not slack_token:
        raise ValueError("CLUBHOUSE_API_TOKEN and SLACK_API_TOKEN must be set")

    return NotifierSettings(
        clubhouse_api_token=clubhouse_token,
        slack_api_token=slack_token,
    )
