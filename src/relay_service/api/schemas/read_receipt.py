from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReadReceiptRequest(BaseModel):
    message_ids: list[str] = Field(alias="messageIds")

    model_config = ConfigDict(populate_by_name=True)


class ReadReceiptResponse(BaseModel):
    success: bool = True
    updated: int


class ReadStatusResponse(BaseModel):
    read: bool
