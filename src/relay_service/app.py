from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relay_service.api.middleware.correlation_id import CorrelationIdMiddleware
from relay_service.api.middleware.timing import RequestTimingMiddleware
from relay_service.api.routers import health, messages, read_receipts, typing_status
from relay_service.api.routers.health import HEALTH_PATHS
from relay_service.application.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from relay_service.application.ports.clock import Clock, SystemClock
from relay_service.application.repositories.conversation import ConversationStore
from relay_service.config import Settings, settings as default_settings
from relay_service.infrastructure.auth.static_credentials import StaticCredentialMap
from relay_service.infrastructure.memory.store import InMemoryConversationStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info("Relay service started")

    yield

    # nothing outlives the process
    app.state.store.clear()
    logger.info("Relay service stopped")


def create_app(
    settings: Settings | None = None,
    store: ConversationStore | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Calculator Relay",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = clock or SystemClock()
    app.state.credentials = StaticCredentialMap(settings.RELAY_API_KEYS)
    app.state.store = store or InMemoryConversationStore(
        clock=app.state.clock,
        typing_timeout_ms=settings.TYPING_TIMEOUT_MS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware, quiet_paths=HEALTH_PATHS)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(typing_status.router)
    app.include_router(read_receipts.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthenticationError)
    async def _unauthenticated(_req: Request, exc: AuthenticationError) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"detail": exc.detail},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AuthorizationError)
    async def _forbidden(_req: Request, exc: AuthorizationError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})
