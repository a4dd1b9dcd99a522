from __future__ import annotations

import pytest

from relay_service.application.exceptions import AuthorizationError
from relay_service.domain.value_objects.enums import Participant
from relay_service.infrastructure.auth.static_credentials import StaticCredentialMap


@pytest.fixture
def credentials() -> StaticCredentialMap:
    return StaticCredentialMap({"key-a": "A", "key-b": "B"})


@pytest.mark.asyncio
async def test_verify_known_tokens(credentials):
    assert (await credentials.verify("key-a")).participant is Participant.A
    assert (await credentials.verify("key-b")).participant is Participant.B


@pytest.mark.asyncio
async def test_verify_unknown_token_raises(credentials):
    with pytest.raises(AuthorizationError):
        await credentials.verify("key-c")


def test_lookup_returns_none_for_unknown(credentials):
    assert credentials.lookup("") is None
    assert credentials.lookup("key-a ") is None


@pytest.mark.parametrize(
    "keys",
    [
        {"only-a": "A"},
        {"x": "A", "y": "A"},
        {"x": "A", "y": "B", "z": "B"},
    ],
)
def test_map_must_cover_both_participants_once(keys):
    with pytest.raises(ValueError):
        StaticCredentialMap(keys)


def test_map_rejects_unknown_role():
    with pytest.raises(ValueError):
        StaticCredentialMap({"x": "A", "y": "C"})
