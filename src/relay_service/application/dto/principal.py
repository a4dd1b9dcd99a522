from __future__ import annotations

from dataclasses import dataclass

from relay_service.domain.value_objects.enums import Participant


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity resolved from a bearer token."""

    participant: Participant

    @property
    def partner(self) -> Participant:
        return self.participant.partner
