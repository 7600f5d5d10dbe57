"""
Notification step of the Clubhouse stale story notifier.

This module handles:
- Building per-user Slack messages for stale stories
- Sending Slack direct messages
- Logging delivery failures
- Running the whole fetch, filter and notify job
"""

from .stale_story_notifier import notify_stale_stories
from .slack_sender import send_direct_message

__all__ = [
    'notify_stale_stories',
    'send_direct_message',
]
