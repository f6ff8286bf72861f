# This project was developed with assistance from AI tools.
"""LINE Messaging API webhook payloads.

Only the fields the conversation engine reads are modelled; everything
else is preserved via ``extra="allow"`` so the raw event can be logged.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventSource(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = "user"
    user_id: str | None = Field(default=None, alias="userId")
    group_id: str | None = Field(default=None, alias="groupId")
    room_id: str | None = Field(default=None, alias="roomId")


class EventMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    id: str | None = None
    text: str | None = None


class WebhookEvent(BaseModel):
    """A single webhook event (``message``, ``follow``, ``join``...)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    message: EventMessage | None = None
    source: EventSource = Field(default_factory=EventSource)
    reply_token: str | None = Field(default=None, alias="replyToken")

    @property
    def is_text_message(self) -> bool:
        return (
            self.type == "message"
            and self.message is not None
            and self.message.type == "text"
            and self.message.text is not None
        )


class WebhookBody(BaseModel):
    """Webhook request body.

    Events stay raw here; each one is validated on its own so a malformed
    or non-object event cannot reject the whole batch.
    """

    model_config = ConfigDict(extra="allow")

    destination: str | None = None
    events: list[Any] = []
