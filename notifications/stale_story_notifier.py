"""
Per-user Slack reminders for stale stories.

Groups stale stories by requester, builds one message per allowlisted Slack
user and delivers it. A failed send is recorded and the remaining recipients
are still attempted.
"""

from datetime import datetime, timezone
from typing import List, Optional

from slack_sdk import WebClient

from models.chat import ChatUser
from models.notification import DeliveryFailure, NotificationSummary
from models.tracking import Story, TrackingUser
from notifications.error_logger import log_notification_error
from notifications.message_builder import build_stale_story_message
from notifications.slack_sender import send_direct_message
from processing.filters import stories_for_user
from shared.errors import DeliveryError
from shared.settings import NotifierSettings
from shared.utils import print_summary


def _tracking_user_for_email(
    tracking_users: List[TrackingUser], email: str
) -> Optional[TrackingUser]:
    for user in tracking_users:
        if user.email == email:
            return user
    return None


def notify_stale_stories(
    client: WebClient,
    stories: List[Story],
    tracking_users: List[TrackingUser],
    chat_users: List[ChatUser],
    settings: NotifierSettings,
    now: Optional[datetime] = None,
    dry_run: bool = False,
) -> NotificationSummary:
    """
    Send each Slack user a summary of their stale stories.

    Slack users are matched to Clubhouse members by exact email. Users
    without a Clubhouse account or without stale stories get no message.

    Args:
        client: Authenticated Slack WebClient
        stories: Stale stories from allowlisted requesters
        tracking_users: Allowlisted Clubhouse members
        chat_users: Allowlisted Slack users, notified in this order
        settings: Run settings (threshold, bot name, story link template)
        now: Reference time for "moved ... ago". Defaults to current UTC time.
        dry_run: If True, print messages instead of sending them

    Returns:
        NotificationSummary with sent and skipped counts

    Raises:
        DeliveryError: After all recipients were attempted, if any send failed
    """
    if now is None:
        now = datetime.now(timezone.utc)

    summary = NotificationSummary()

    for chat_user in chat_users:
        tracking_user = _tracking_user_for_email(tracking_users, chat_user.email)
        if tracking_user is None:
            print(f"  ⊘ No Clubhouse account for {chat_user.email}, skipping")
            summary.skipped += 1
            continue

        user_stories = stories_for_user(stories, tracking_user)
        if not user_stories:
            summary.skipped += 1
            continue

        message = build_stale_story_message(
            user_stories,
            settings.stale_threshold_hours,
            settings.story_url_template,
            now,
        )

        if dry_run:
            print(f"  [DRY RUN] Would message {chat_user.email}:\n{message}")
            summary.sent += 1
            continue

        result = send_direct_message(
            client, chat_user.id, message, settings.bot_username
        )

        if result["success"]:
            print(f"  ✓ Sent {len(user_stories)} story(s) to {chat_user.email}")
            summary.sent += 1
            continue

        error_msg = str(result.get("error", "Unknown error"))
        print(f"  ✗ Failed to message {chat_user.email}: {error_msg}")
        summary.failures.append(
            DeliveryFailure(
                recipient_id=chat_user.id,
                recipient_email=chat_user.email,
                error=error_msg,
            )
        )

        try:
            error_file = log_notification_error(
                error_type="delivery",
                error_message=error_msg,
                context={
                    "slack_user_id": chat_user.id,
                    "email": chat_user.email,
                    "story_ids": [story.id for story in user_stories],
                },
            )
        except OSError as e:
            # Best-effort: remaining recipients are still attempted
            print(f"    ⚠️  Could not write error report: {e}")
        else:
            print(f"    Error details logged to: {error_file}")

    print_summary(summary.sent, summary.skipped, summary.failed)

    if summary.failures:
        raise DeliveryError(summary.failures)

    return summary
