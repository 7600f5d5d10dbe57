# This module defines the notifier's fixed settings as module-level constants.
# Changing who gets notified, which team is watched, or how long a story may
# sit in acceptance requires a code change and a redeploy.

# Clubhouse "Product" team
TEAM_ID = 5285

# Hours a story has to sit in acceptance before its requester is nagged
STALE_THRESHOLD_HOURS = 18

# Workflow state watched for stale stories, looked up by name within the team
ACCEPTANCE_STATE_NAME = "In Acceptance"

# Display name for the Slack bot
BOT_USERNAME = "Clubhouse Notifier"

# Only these people are notified. Must match both the Slack profile email and
# the Clubhouse profile email exactly (case-sensitive).
ALLOWLISTED_EMAILS = [
    "stephen.meriwether@example.com",
    "adam.chadroff@example.com",
    "jason.fromm@example.com",
]

CLUBHOUSE_API_BASE_URL = "https://api.clubhouse.io/api/v2/"

# Formatted with the story id for links in Slack messages
STORY_URL_TEMPLATE = "https://app.clubhouse.io/policygenius/story/{story_id}"
