from __future__ import annotations

import hmac
import logging
from collections.abc import Mapping

from relay_service.application.dto.principal import Principal
from relay_service.application.exceptions import AuthorizationError
from relay_service.domain.value_objects.enums import Participant

logger = logging.getLogger(__name__)


class StaticCredentialMap:
    """Map the two pre-shared bearer tokens to their participants."""

    def __init__(self, keys: Mapping[str, Participant | str]) -> None:
        entries = {token: Participant(role) for token, role in keys.items()}
        if sorted(entries.values()) != sorted(Participant):
            raise ValueError("Credential map needs exactly one token per participant")
        self._entries: tuple[tuple[str, Participant], ...] = tuple(entries.items())

    async def verify(self, token: str) -> Principal:
        participant = self.lookup(token)
        if participant is None:
            raise AuthorizationError("Invalid credential")
        return Principal(participant=participant)

    def lookup(self, token: str) -> Participant | None:
        found: Participant | None = None
        for known, participant in self._entries:
            if hmac.compare_digest(known.encode(), token.encode()):
                found = participant
        return found
