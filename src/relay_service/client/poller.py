"""Client-side polling loop that keeps a local view of the conversation."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

import httpx

from relay_service.client.http import RelayClient, RelayClientError, RemoteMessage
from relay_service.domain.value_objects.enums import Participant

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.5

OnMessages = Callable[[list[RemoteMessage]], None]
OnTyping = Callable[[bool], None]
OnRead = Callable[[list[str]], None]


class ChatPoller:
    """Drive poll / read-receipt / typing calls on a fixed cadence.

    A tick that fails on transport, HTTP or decoding errors is logged and
    dropped; the cursor and local view only move after a successful poll.
    Own messages not yet seen as read are rechecked on every tick.
    """

    def __init__(
        self,
        client: RelayClient,
        participant: Participant,
        interval: float = DEFAULT_POLL_INTERVAL,
        on_messages: OnMessages | None = None,
        on_typing: OnTyping | None = None,
        on_read: OnRead | None = None,
        auto_read: bool = True,
    ) -> None:
        self._client = client
        self._participant = participant
        self._interval = interval
        self._on_messages = on_messages
        self._on_typing = on_typing
        self._on_read = on_read
        self._auto_read = auto_read
        self._task: asyncio.Task[None] | None = None
        self.cursor = 0
        self.partner_typing = False
        self._messages: dict[str, RemoteMessage] = {}

    @property
    def messages(self) -> list[RemoteMessage]:
        return sorted(self._messages.values(), key=lambda m: m.timestamp)

    def _merge(self, batch: list[RemoteMessage]) -> None:
        for msg in batch:
            self._messages[msg.id] = msg
            self.cursor = max(self.cursor, msg.timestamp)

    async def refresh(self) -> list[RemoteMessage]:
        """Replace the local view with the full history."""
        history = await self._client.list_messages()
        self._messages = {}
        self.cursor = 0
        self._merge(history)
        return self.messages

    async def tick(self) -> bool:
        try:
            batch = await self._client.poll(self.cursor)
            self._merge(batch)
            if batch and self._on_messages:
                self._on_messages(batch)

            if self._auto_read:
                # whole view, so receipts lost on a failed tick go out next time
                unread = [
                    m.id for m in self._messages.values()
                    if m.sender != self._participant and not m.read
                ]
                if unread:
                    await self._client.send_read_receipt(unread)
                    for message_id in unread:
                        self._messages[message_id].read = True

            await self._sync_own_receipts()

            typing = await self._client.get_typing()
            if typing != self.partner_typing:
                self.partner_typing = typing
                if self._on_typing:
                    self._on_typing(typing)
        except (httpx.HTTPError, RelayClientError, KeyError, ValueError) as exc:
            logger.warning("Poll tick failed, retrying next tick: %s", exc)
            return False
        return True

    async def _sync_own_receipts(self) -> None:
        pending = [
            m.id for m in self._messages.values()
            if m.sender == self._participant and not m.read
        ]
        newly_read: list[str] = []
        for message_id in pending:
            if await self._client.get_read_status(message_id):
                self._messages[message_id].read = True
                newly_read.append(message_id)
        if newly_read and self._on_read:
            self._on_read(newly_read)

    async def run(self) -> None:
        while True:
            try:
                await self.tick()
            except Exception:
                logger.exception("Chat poller tick error")
            await asyncio.sleep(self._interval)

    async def start(self) -> None:
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self.run(), name=f"chat-poller-{self._participant}")
        logger.info("Chat poller started for %s (interval=%.1fs)", self._participant, self._interval)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Chat poller stopped")
