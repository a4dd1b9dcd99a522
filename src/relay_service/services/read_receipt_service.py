from __future__ import annotations

import logging
from collections.abc import Sequence

from relay_service.application.dto.principal import Principal
from relay_service.application.exceptions import ValidationError
from relay_service.application.repositories.conversation import ConversationStore

logger = logging.getLogger(__name__)


def send_read_receipt(
    principal: Principal,
    message_ids: object,
    store: ConversationStore,
) -> int:
    """Mark the caller's incoming messages read.

    Unknown ids, ids of messages addressed to the other participant and ids
    already read are skipped. Returns the number of newly read messages.
    """
    if not isinstance(message_ids, Sequence) or isinstance(message_ids, (str, bytes)):
        raise ValidationError("messageIds must be an array")
    ids = [m for m in message_ids if isinstance(m, str)]
    updated = store.mark_read(principal.participant, ids)
    if updated:
        logger.info("Participant %s read %d messages", principal.participant, updated)
    return updated


def get_read_status(message_id: str, store: ConversationStore) -> bool:
    return store.is_read(message_id)
