# ruff: noqa: N999
"""
Domain Layer

Contains pure playback logic organized by bounded context:
- shared/: Cross-cutting types, messages, exceptions and the event bus
- music/: Track records, node responses, queue and autoplay rules
"""

from music_dispatcher.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
