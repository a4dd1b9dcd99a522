from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class AuthenticationError(AppError):
    """Credential missing or malformed."""


class AuthorizationError(AppError):
    """Credential well-formed but not recognised."""


class ValidationError(AppError):
    pass
