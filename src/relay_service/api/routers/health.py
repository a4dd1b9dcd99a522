from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from relay_service.application.ports.clock import Clock, epoch_ms

router = APIRouter(tags=["health"])

HEALTH_PATHS = frozenset({"/healthz", "/api/health"})


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/health")
async def health(request: Request) -> dict[str, Any]:
    clock: Clock = request.app.state.clock
    return {"status": "ok", "timestamp": epoch_ms(clock.now())}
