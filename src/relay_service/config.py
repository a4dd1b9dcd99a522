from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from relay_service.domain.value_objects.enums import Participant


class Settings(BaseSettings):
    RELAY_API_KEYS: dict[str, Participant] = {
        "calc-user-a-key-2024": Participant.A,
        "calc-user-b-key-2024": Participant.B,
    }

    TYPING_TIMEOUT_MS: int = 3000
    MAX_MESSAGE_LENGTH: int = 5000

    # GET /api/read/{id} accepts anonymous callers when disabled
    READ_STATUS_REQUIRES_AUTH: bool = True

    CORS_ORIGINS: list[str] = ["*"]

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "info"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
