"""Entry point invoked by the scheduler."""

from notifications.process_stale_stories import main

if __name__ == "__main__":
    main()
