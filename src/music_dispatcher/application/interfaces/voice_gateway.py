"""Port interface for the chat platform's voice connection."""

from __future__ import annotations

from abc import ABC, abstractmethod

from music_dispatcher.domain.shared.types import DiscordSnowflake


class VoiceGateway(ABC):
    """Interface for leaving voice channels."""

    @abstractmethod
    async def leave_voice_channel(self, guild_id: DiscordSnowflake) -> None:
        """Disconnect from voice in a guild and release its player."""
        ...
