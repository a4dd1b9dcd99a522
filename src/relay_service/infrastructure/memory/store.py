"""Process-local conversation state for the single two-party chat."""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Iterable

from relay_service.application.ports.clock import Clock, SystemClock, epoch_ms
from relay_service.domain.entities.message import Message
from relay_service.domain.entities.typing_state import TypingState
from relay_service.domain.value_objects.enums import Participant

logger = logging.getLogger(__name__)

DEFAULT_TYPING_TIMEOUT_MS = 3000


class InMemoryConversationStore:
    """Implements application.repositories.conversation.ConversationStore.

    Every public method runs as one critical section under a single lock, so
    id assignment, typing updates and read-receipt counting are never
    interleaved. Messages handed out are copies; mutating them has no effect
    on the store.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        typing_timeout_ms: int = DEFAULT_TYPING_TIMEOUT_MS,
    ) -> None:
        self._clock = clock or SystemClock()
        self._typing_timeout_ms = typing_timeout_ms
        self._lock = threading.Lock()
        self._messages: list[Message] = []
        self._by_id: dict[str, Message] = {}
        self._receipts: dict[str, bool] = {}
        self._typing: dict[Participant, TypingState] = {
            p: TypingState(is_typing=False, timestamp=0) for p in Participant
        }
        # never reset, ids stay unique across purges
        self._counter = 0
        self._last_timestamp = 0

    def _now_ms(self) -> int:
        return epoch_ms(self._clock.now())

    def _snapshot(self, message: Message) -> Message:
        return replace(message, read=self._receipts.get(message.id, False))

    # -- messages ---------------------------------------------------------

    def append(
        self,
        sender: Participant,
        text: str,
        local_id: str | None = None,
    ) -> Message:
        with self._lock:
            timestamp = max(self._now_ms(), self._last_timestamp + 1)
            self._last_timestamp = timestamp
            self._counter += 1
            message = Message(
                id=f"msg_{timestamp}_{self._counter}",
                local_id=local_id,
                text=text,
                sender=sender,
                recipient=sender.partner,
                timestamp=timestamp,
            )
            self._messages.append(message)
            self._by_id[message.id] = message
            self._receipts[message.id] = False
            return self._snapshot(message)

    def list_for(self, participant: Participant) -> list[Message]:
        with self._lock:
            return [
                self._snapshot(m)
                for m in self._messages
                if participant in (m.sender, m.recipient)
            ]

    def poll_since(self, participant: Participant, since: int) -> list[Message]:
        with self._lock:
            result: list[Message] = []
            for m in self._messages:
                if participant not in (m.sender, m.recipient) or m.timestamp <= since:
                    continue
                if m.recipient == participant:
                    m.delivered = True
                result.append(self._snapshot(m))
            return result

    def mark_read(self, participant: Participant, message_ids: Iterable[str]) -> int:
        with self._lock:
            updated = 0
            for message_id in message_ids:
                message = self._by_id.get(message_id)
                if message is None or message.recipient != participant:
                    continue
                if self._receipts.get(message_id, False):
                    continue
                self._receipts[message_id] = True
                message.read = True
                updated += 1
            return updated

    def is_read(self, message_id: str) -> bool:
        with self._lock:
            return self._receipts.get(message_id, False)

    def purge(self, participant: Participant) -> int:
        with self._lock:
            removed = [m for m in self._messages if participant in (m.sender, m.recipient)]
            if not removed:
                return 0
            self._messages = [
                m for m in self._messages if participant not in (m.sender, m.recipient)
            ]
            for m in removed:
                del self._by_id[m.id]
                self._receipts.pop(m.id, None)
            return len(removed)

    def count(self) -> int:
        with self._lock:
            return len(self._messages)

    # -- typing -----------------------------------------------------------

    def set_typing(self, participant: Participant, is_typing: bool) -> TypingState:
        with self._lock:
            state = TypingState(is_typing=is_typing, timestamp=self._now_ms())
            self._typing[participant] = state
            return state

    def get_typing(self, participant: Participant) -> bool:
        with self._lock:
            state = self._typing[participant]
            if state.is_typing and state.is_stale(self._now_ms(), self._typing_timeout_ms):
                state = replace(state, is_typing=False)
                self._typing[participant] = state
            return state.is_typing

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()
            self._by_id.clear()
            self._receipts.clear()
            for p in Participant:
                self._typing[p] = TypingState(is_typing=False, timestamp=0)
        logger.info("Conversation store cleared")
