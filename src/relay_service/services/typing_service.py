from __future__ import annotations

from relay_service.application.dto.principal import Principal
from relay_service.application.exceptions import ValidationError
from relay_service.application.repositories.conversation import TypingStore


def set_typing(principal: Principal, is_typing: object, store: TypingStore) -> None:
    if not isinstance(is_typing, bool):
        raise ValidationError("isTyping must be a boolean")
    store.set_typing(principal.participant, is_typing)


def get_partner_typing(principal: Principal, store: TypingStore) -> bool:
    """Partner's typing flag; expired signals read as False."""
    return store.get_typing(principal.partner)
