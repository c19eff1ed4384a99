"""
Shared Domain Kernel

Contains types and exceptions shared across the package. The event bus lives
in ``events`` and is imported from there directly.
"""

from music_dispatcher.domain.shared.exceptions import (
    DomainError,
    InvalidTrackError,
    SessionNotFoundError,
)

__all__ = [
    "DomainError",
    "InvalidTrackError",
    "SessionNotFoundError",
]
