"""
Error logging utility for the stale story notifier.

Writes delivery failure reports to timestamped files so a failed scheduled
run can be inspected after the fact.
"""

import os
from datetime import datetime
from typing import Any

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(__file__), "logs")


def log_notification_error(
    error_type: str,
    error_message: str,
    context: dict[str, Any] | None = None,
    log_dir: str = DEFAULT_LOG_DIR,
) -> str:
    """
    Write a notification error report to a timestamped file.

    Args:
        error_type: Stage that failed (e.g. 'delivery')
        error_message: The error message
        context: Optional details such as recipient id, email, story ids
        log_dir: Directory for report files, created if missing

    Returns:
        Path to the report file
    """
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep reports from one run (one per recipient) apart
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"notification_error_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Stale Story Notifier Error - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n")

        if context:
            f.write("\nContext:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
