from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TypingState:
    is_typing: bool
    timestamp: int

    def is_stale(self, now_ms: int, timeout_ms: int) -> bool:
        return now_ms - self.timestamp > timeout_ms
