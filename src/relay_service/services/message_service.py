from __future__ import annotations

import logging

from relay_service.application.dto.principal import Principal
from relay_service.application.exceptions import ValidationError
from relay_service.application.repositories.conversation import ConversationStore
from relay_service.domain.entities.message import Message

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


def validate_text(text: object, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """Return the trimmed message text or raise ValidationError.

    The length limit applies to the text as submitted, before trimming.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Message text is required")
    if len(text) > max_length:
        raise ValidationError(f"Message too long (max {max_length} characters)")
    return text.strip()


def send_message(
    principal: Principal,
    text: object,
    local_id: str | None,
    store: ConversationStore,
    max_length: int = MAX_MESSAGE_LENGTH,
) -> Message:
    body = validate_text(text, max_length)
    msg = store.append(principal.participant, body, local_id or None)
    logger.info(
        "Message %s sent %s -> %s (%d chars)",
        msg.id, msg.sender, msg.recipient, len(msg.text),
    )
    return msg


def list_messages(principal: Principal, store: ConversationStore) -> list[Message]:
    return store.list_for(principal.participant)


def poll_messages(
    principal: Principal,
    since: int,
    store: ConversationStore,
) -> list[Message]:
    """Messages visible to the caller with ``timestamp > since``.

    Incoming messages in the result are marked delivered.
    """
    return store.poll_since(principal.participant, since)


def purge_messages(principal: Principal, store: ConversationStore) -> int:
    removed = store.purge(principal.participant)
    logger.info("Purged %d messages for participant %s", removed, principal.participant)
    return removed
