"""Async HTTP client for the relay API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from relay_service.domain.value_objects.enums import Participant

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0)


class RelayClientError(Exception):
    """Non-2xx reply from the relay."""

    def __init__(self, status_code: int, detail: Any = None) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"relay returned {status_code}: {detail}")


@dataclass(slots=True)
class RemoteMessage:
    id: str
    text: str
    sender: Participant
    recipient: Participant
    timestamp: int
    read: bool
    local_id: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> RemoteMessage:
        return cls(
            id=data["id"],
            text=data["text"],
            sender=Participant(data["sender"]),
            recipient=Participant(data["recipient"]),
            timestamp=int(data["timestamp"]),
            read=bool(data["read"]),
            local_id=data.get("localId"),
        )


class RelayClient:
    """Thin wrapper over ``httpx.AsyncClient`` for one participant's token.

    Pass ``http_client`` to reuse an existing client (for example one bound to
    an ASGI transport in tests); it is then left open on ``aclose()``.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: httpx.Timeout | None = None,
    ) -> None:
        self._headers = {"Authorization": f"Bearer {token}"}
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout or DEFAULT_TIMEOUT,
            follow_redirects=True,
        )

    async def __aenter__(self) -> RelayClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._http.request(method, path, headers=self._headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            raise RelayClientError(response.status_code, detail)
        return response.json()

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/api/health")

    async def send(self, text: str, local_id: str | None = None) -> RemoteMessage:
        data = await self._request("POST", "/api/send", json={"text": text, "localId": local_id})
        return RemoteMessage.from_json(data)

    async def list_messages(self) -> list[RemoteMessage]:
        data = await self._request("GET", "/api/messages")
        return [RemoteMessage.from_json(m) for m in data]

    async def poll(self, since: int = 0) -> list[RemoteMessage]:
        data = await self._request("GET", "/api/poll", params={"since": since})
        return [RemoteMessage.from_json(m) for m in data]

    async def set_typing(self, is_typing: bool) -> None:
        await self._request("POST", "/api/typing", json={"isTyping": is_typing})

    async def get_typing(self) -> bool:
        data = await self._request("GET", "/api/typing")
        return bool(data["isTyping"])

    async def send_read_receipt(self, message_ids: list[str]) -> int:
        data = await self._request("POST", "/api/read", json={"messageIds": message_ids})
        return int(data["updated"])

    async def get_read_status(self, message_id: str) -> bool:
        data = await self._request("GET", f"/api/read/{message_id}")
        return bool(data["read"])

    async def purge(self) -> None:
        await self._request("DELETE", "/api/messages")
