from __future__ import annotations

from typing import Iterable, Protocol

from relay_service.domain.entities.message import Message
from relay_service.domain.entities.typing_state import TypingState
from relay_service.domain.value_objects.enums import Participant


class MessageReader(Protocol):
    def list_for(self, participant: Participant) -> list[Message]: ...

    def poll_since(self, participant: Participant, since: int) -> list[Message]:
        """Messages newer than ``since``; marks the caller's incoming ones delivered."""
        ...

    def is_read(self, message_id: str) -> bool: ...

    def count(self) -> int: ...


class MessageWriter(Protocol):
    def append(
        self,
        sender: Participant,
        text: str,
        local_id: str | None = None,
    ) -> Message: ...

    def mark_read(self, participant: Participant, message_ids: Iterable[str]) -> int:
        """Mark incoming messages read. Return how many were newly marked."""
        ...

    def purge(self, participant: Participant) -> int: ...


class TypingStore(Protocol):
    def set_typing(self, participant: Participant, is_typing: bool) -> TypingState: ...

    def get_typing(self, participant: Participant) -> bool: ...


class ConversationStore(MessageReader, MessageWriter, TypingStore, Protocol):
    def clear(self) -> None: ...
