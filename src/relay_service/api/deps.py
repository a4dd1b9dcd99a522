"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from relay_service.application.dto.principal import Principal
from relay_service.application.exceptions import AuthenticationError
from relay_service.application.ports.auth import CredentialResolver
from relay_service.application.repositories.conversation import ConversationStore
from relay_service.config import Settings

# auto_error=False so a missing header maps to AuthenticationError (401)
_bearer_scheme = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[
    HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)
]


def get_store(request: Request) -> ConversationStore:
    return request.app.state.store


StoreDep = Annotated[ConversationStore, Depends(get_store)]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_verifier(request: Request) -> CredentialResolver:
    return request.app.state.credentials


async def get_current_principal(
    credentials: BearerCredentials,
    verifier: Annotated[CredentialResolver, Depends(get_verifier)],
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing or invalid authorization header")
    return await verifier.verify(credentials.credentials)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_read_status_principal(
    credentials: BearerCredentials,
    verifier: Annotated[CredentialResolver, Depends(get_verifier)],
    config: SettingsDep,
) -> Principal | None:
    if credentials is None and not config.READ_STATUS_REQUIRES_AUTH:
        return None
    return await get_current_principal(credentials, verifier)


OptionalPrincipal = Annotated[Principal | None, Depends(get_read_status_principal)]
