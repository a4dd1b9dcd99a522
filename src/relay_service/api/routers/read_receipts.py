from __future__ import annotations

from fastapi import APIRouter

from relay_service.api.deps import CurrentPrincipal, OptionalPrincipal, StoreDep
from relay_service.api.schemas.read_receipt import (
    ReadReceiptRequest,
    ReadReceiptResponse,
    ReadStatusResponse,
)
from relay_service.services import read_receipt_service

router = APIRouter(prefix="/api", tags=["read-receipts"])


@router.post("/read", response_model=ReadReceiptResponse)
async def send_read_receipt(
    body: ReadReceiptRequest,
    principal: CurrentPrincipal,
    store: StoreDep,
) -> ReadReceiptResponse:
    updated = read_receipt_service.send_read_receipt(principal, body.message_ids, store)
    return ReadReceiptResponse(updated=updated)


@router.get("/read/{message_id}", response_model=ReadStatusResponse)
async def get_read_status(
    message_id: str,
    _principal: OptionalPrincipal,
    store: StoreDep,
) -> ReadStatusResponse:
    return ReadStatusResponse(read=read_receipt_service.get_read_status(message_id, store))
