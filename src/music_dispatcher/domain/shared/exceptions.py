"""Base exception classes for dispatcher errors."""

from __future__ import annotations

from .messages import ErrorMessages


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidTrackError(DomainError):
    """Raised when a track record cannot be built from its source."""

    def __init__(self, message: str = ErrorMessages.TRACK_NOT_PROVIDED) -> None:
        super().__init__(message, code="INVALID_TRACK")


class SessionNotFoundError(DomainError):
    """Raised when a guild has no registered dispatcher."""

    def __init__(self, guild_id: int, message: str | None = None) -> None:
        msg = message or ErrorMessages.SESSION_NOT_FOUND.format(guild_id=guild_id)
        super().__init__(msg, code="SESSION_NOT_FOUND")
        self.guild_id = guild_id
