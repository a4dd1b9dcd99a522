from __future__ import annotations

from fastapi import APIRouter

from relay_service.api.deps import CurrentPrincipal, StoreDep
from relay_service.api.schemas.typing_status import (
    SetTypingRequest,
    SuccessResponse,
    TypingStatusResponse,
)
from relay_service.services import typing_service

router = APIRouter(prefix="/api", tags=["typing"])


@router.post("/typing", response_model=SuccessResponse)
async def set_typing(
    body: SetTypingRequest,
    principal: CurrentPrincipal,
    store: StoreDep,
) -> SuccessResponse:
    typing_service.set_typing(principal, body.is_typing, store)
    return SuccessResponse()


@router.get("/typing", response_model=TypingStatusResponse)
async def get_typing(
    principal: CurrentPrincipal,
    store: StoreDep,
) -> TypingStatusResponse:
    is_typing = typing_service.get_partner_typing(principal, store)
    return TypingStatusResponse(is_typing=is_typing)
