from datetime import datetime, timezone
from dateutil import parser as date_parser


def parse_timestamp(timestamp: str) -> datetime | None:
    """Parse an RFC3339 timestamp into an aware datetime.

    Returns None for empty, malformed, or offset-less values.
    """
    if not timestamp:
        return None
    try:
        dt = date_parser.isoparse(timestamp)
    except (ValueError, OverflowError, TypeError):
        return None
    if dt.tzinfo is None:
        return None
    return dt


def as_utc_if_naive(dt: datetime) -> datetime:
    """Treat a naive datetime as UTC so it compares with parsed timestamps."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def print_summary(sent: int, skipped: int, failed: int) -> None:
    """Print notification summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Notification Run Complete!")
    print(f"{'=' * 60}")
    print(f"✓ Sent: {sent}")
    print(f"⊘ Skipped (nothing to report): {skipped}")
    print(f"✗ Failed: {failed}")
    print(f"{'=' * 60}\n")
