from __future__ import annotations

from enum import StrEnum


class Participant(StrEnum):
    A = "A"
    B = "B"

    @property
    def partner(self) -> Participant:
        return Participant.B if self is Participant.A else Participant.A
