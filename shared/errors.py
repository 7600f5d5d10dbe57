"""Exceptions raised by the notifier run."""

from typing import Literal

from models.notification import DeliveryFailure

FetchStage = Literal["request", "read", "decode"]


class NotifierError(Exception):
    """Base class for errors that abort a notifier run."""


class FetchError(NotifierError):
    """An upstream fetch failed while sending, reading, or decoding."""

    def __init__(self, resource: str, stage: FetchStage, cause: object) -> None:
        self.resource = resource
        self.stage = stage
        self.cause = cause
        super().__init__(f"{resource} {stage} failed: {cause}")


class WorkflowStateNotFoundError(NotifierError):
    """The team has no workflow state with the expected name."""

    def __init__(self, team_id: int, name: str) -> None:
        self.team_id = team_id
        self.name = name
        super().__init__(f"No workflow state named {name!r} for team {team_id}")


class DeliveryError(NotifierError):
    """One or more direct messages failed to send.

    Raised only after every recipient was attempted.
    """

    def __init__(self, failures: list[DeliveryFailure]) -> None:
        self.failures = failures
        super().__init__(
            "; ".join(
                f"{failure.recipient_id} ({failure.recipient_email}): {failure.error}"
                for failure in failures
            )
        )
