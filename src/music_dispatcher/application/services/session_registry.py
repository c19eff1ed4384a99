"""Registry of live dispatchers, keyed by guild."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import SessionNotFoundError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps a guild id to its active dispatcher.

    Bootstrap inserts, ``Dispatcher.destroy`` removes. Dispatchers only ever
    look themselves up.
    """

    def __init__(self) -> None:
        self._sessions: dict[DiscordSnowflake, Dispatcher] = {}

    def insert(self, guild_id: DiscordSnowflake, dispatcher: Dispatcher) -> None:
        self._sessions[guild_id] = dispatcher
        logger.debug(LogTemplates.DISPATCHER_REGISTERED, guild_id)

    def lookup(self, guild_id: DiscordSnowflake) -> Dispatcher | None:
        return self._sessions.get(guild_id)

    def get(self, guild_id: DiscordSnowflake) -> Dispatcher:
        """Strict lookup for callers that require a live session."""
        dispatcher = self._sessions.get(guild_id)
        if dispatcher is None:
            raise SessionNotFoundError(guild_id)
        return dispatcher

    def remove(self, guild_id: DiscordSnowflake) -> Dispatcher | None:
        dispatcher = self._sessions.pop(guild_id, None)
        if dispatcher is not None:
            logger.debug(LogTemplates.DISPATCHER_UNREGISTERED, guild_id)
        return dispatcher

    def has(self, guild_id: DiscordSnowflake) -> bool:
        return guild_id in self._sessions

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
