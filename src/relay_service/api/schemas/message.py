from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from relay_service.domain.value_objects.enums import Participant


class SendMessageRequest(BaseModel):
    text: str | None = None
    local_id: str | None = Field(default=None, alias="localId")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    id: str
    text: str
    sender: Participant
    recipient: Participant
    timestamp: int
    read: bool

    model_config = ConfigDict(from_attributes=True)


class SentMessageResponse(MessageResponse):
    local_id: str | None = Field(default=None, alias="localId")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PurgeResponse(BaseModel):
    success: bool = True
    message: str = "Conversation history permanently deleted from server"
