from __future__ import annotations

from dataclasses import dataclass

from relay_service.domain.value_objects.enums import Participant


@dataclass(slots=True)
class Message:
    id: str
    local_id: str | None
    text: str
    sender: Participant
    recipient: Participant
    timestamp: int
    delivered: bool = False
    read: bool = False
