"""Player lifecycle events and the bus that carries them.

Each channel is a frozen pydantic model with a fixed payload. Player and
dispatcher references are carried as-is so subscribers can act on the
session that raised the event.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from music_dispatcher.domain.music.entities import Song
from music_dispatcher.domain.shared.messages import LogTemplates
from music_dispatcher.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    UtcDatetimeField,
    utcnow,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], Awaitable[None]]


class DomainEvent(BaseModel):
    """Base class for all bus events."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


# === Player Events ===


class TrackStart(DomainEvent):
    guild_id: DiscordSnowflake
    player: Any
    track: Song | None = None
    dispatcher: Any = None


class TrackEnd(DomainEvent):
    guild_id: DiscordSnowflake
    player: Any
    track: Song | None = None
    dispatcher: Any = None


class QueueEnd(DomainEvent):
    guild_id: DiscordSnowflake
    player: Any
    track: Song | None = None
    dispatcher: Any = None


class TrackStuck(DomainEvent):
    guild_id: DiscordSnowflake
    player: Any
    track: Song | None = None


class SocketClosed(DomainEvent):
    guild_id: DiscordSnowflake
    player: Any
    details: tuple[Any, ...] = ()


class PlayerDestroy(DomainEvent):
    guild_id: DiscordSnowflake
    player: Any


# === Event Bus ===


class EventBus:
    """In-memory pub/sub event bus keyed by event class.

    Handlers are called concurrently. Exceptions in handlers are logged
    but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        self._handlers[event_type].append(handler)
        logger.debug("Subscribed handler to: %s", event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            logger.debug("Unsubscribed handler from %s", event_type.__name__)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(LogTemplates.EVENT_NO_HANDLERS, event_type.__name__)
            return

        logger.debug(LogTemplates.EVENT_PUBLISHING, event_type.__name__, len(handlers))

        async def safe_call(handler: EventHandler[Any]) -> None:
            try:
                await handler(event)
            except Exception as e:
                logger.exception(LogTemplates.EVENT_HANDLER_FAILED, event_type.__name__, e)

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(safe_call(handler))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug("Cleared all event handlers")


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get or create the process-wide event bus."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the process-wide event bus (for testing)."""
    global _event_bus
    if _event_bus is not None:
        _event_bus.clear()
    _event_bus = None
