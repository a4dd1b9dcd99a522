from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class SetTypingRequest(BaseModel):
    is_typing: StrictBool = Field(alias="isTyping")

    model_config = ConfigDict(populate_by_name=True)


class TypingStatusResponse(BaseModel):
    is_typing: bool = Field(alias="isTyping")

    model_config = ConfigDict(populate_by_name=True)


class SuccessResponse(BaseModel):
    success: bool = True
