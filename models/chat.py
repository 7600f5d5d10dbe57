"""Pydantic models for Slack (chat platform) data."""

from pydantic import AliasPath, BaseModel, ConfigDict, Field, field_validator

from models.types import ChatUserID


class ChatUser(BaseModel):
    """Slack workspace user.

    Bots and some guest accounts have no email in their profile, so email
    defaults to an empty string that never matches the allowlist.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: ChatUserID
    email: str = Field(default="", validation_alias=AliasPath("profile", "email"))

    @field_validator("email", mode="before")
    @classmethod
    def _none_email_to_empty(cls, value: object) -> object:
        return "" if value is None else value
