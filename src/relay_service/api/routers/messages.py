from __future__ import annotations

from fastapi import APIRouter, Query

from relay_service.api.deps import CurrentPrincipal, SettingsDep, StoreDep
from relay_service.api.schemas.message import (
    MessageResponse,
    PurgeResponse,
    SendMessageRequest,
    SentMessageResponse,
)
from relay_service.services import message_service

router = APIRouter(prefix="/api", tags=["messages"])


@router.post("/send", response_model=SentMessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    store: StoreDep,
    config: SettingsDep,
) -> SentMessageResponse:
    msg = message_service.send_message(
        principal, body.text, body.local_id, store, config.MAX_MESSAGE_LENGTH,
    )
    return SentMessageResponse.model_validate(msg, from_attributes=True)


@router.get("/messages", response_model=list[MessageResponse])
async def list_messages(
    principal: CurrentPrincipal,
    store: StoreDep,
) -> list[MessageResponse]:
    messages = message_service.list_messages(principal, store)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.get("/poll", response_model=list[MessageResponse])
async def poll_messages(
    principal: CurrentPrincipal,
    store: StoreDep,
    since: int = Query(0),
) -> list[MessageResponse]:
    messages = message_service.poll_messages(principal, since, store)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.delete("/messages", response_model=PurgeResponse)
async def purge_messages(
    principal: CurrentPrincipal,
    store: StoreDep,
) -> PurgeResponse:
    message_service.purge_messages(principal, store)
    return PurgeResponse()
