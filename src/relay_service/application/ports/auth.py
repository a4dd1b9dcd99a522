from __future__ import annotations

from typing import Protocol

from relay_service.application.dto.principal import Principal


class CredentialResolver(Protocol):
    async def verify(self, token: str) -> Principal: ...
