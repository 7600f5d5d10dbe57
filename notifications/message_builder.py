"""
Slack message formatting for stale story reminders.

Handles building the per-user direct message text.
"""

from datetime import datetime, timedelta
from typing import List

from models.tracking import Story


def format_duration(delta: timedelta) -> str:
    """
    Render a duration compactly, largest unit first.

    Examples: "45s", "12m5s", "20h0m0s", "3d4h12m0s". Leading zero units
    are dropped, trailing ones are kept.
    """
    total_seconds = int(delta.total_seconds())
    sign = "-" if total_seconds < 0 else ""
    total_seconds = abs(total_seconds)

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    if days:
        return f"{sign}{days}d{hours}h{minutes}m{seconds}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def build_stale_story_message(
    stories: List[Story],
    threshold_hours: int,
    story_url_template: str,
    now: datetime,
) -> str:
    """
    Build the direct message text for one user's stale stories.

    Args:
        stories: The user's stale stories, in display order
        threshold_hours: Staleness threshold, shown in the summary line
        story_url_template: Story link template with a {story_id} placeholder
        now: Reference time for "moved ... ago"

    Returns:
        Slack mrkdwn text: a summary line then one bullet per story
    """
    text = (
        f"You have {len(stories)} story(s) in acceptance "
        f"for more than {threshold_hours} hours\n"
    )

    for story in stories:
        elapsed = story.time_since_moved(now)
        ago = format_duration(elapsed) if elapsed is not None else "an unknown time"
        text += f"* <{story.url(story_url_template)}|{story.name}> was moved {ago} ago\n"

    return text
