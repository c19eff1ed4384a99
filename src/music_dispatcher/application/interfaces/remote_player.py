"""Port interface for a player living on the remote audio node."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from music_dispatcher.domain.music.value_objects import PlayerEvent
from music_dispatcher.domain.shared.types import EncodedTrackStr, NonNegativeInt

PlayerListener = Callable[..., Awaitable[None]]


class RemotePlayer(ABC):
    """Interface for one guild's player on the audio node.

    The node decodes and streams audio; this side only sends commands and
    receives lifecycle notifications.
    """

    @abstractmethod
    async def play_track(self, encoded: EncodedTrackStr) -> None:
        """Start streaming the given encoded track, replacing whatever plays."""
        ...

    @abstractmethod
    async def set_paused(self, paused: bool) -> None:
        ...

    @abstractmethod
    async def stop_track(self) -> None:
        """Stop the current track. The node answers with an ``end`` notification."""
        ...

    @abstractmethod
    async def seek_to(self, position_ms: NonNegativeInt) -> None:
        ...

    @property
    @abstractmethod
    def paused(self) -> bool:
        ...

    @property
    @abstractmethod
    def volume(self) -> int:
        ...

    @abstractmethod
    def on(self, event: PlayerEvent, listener: PlayerListener) -> Any:
        """Register *listener* for a player notification.

        Listeners receive the node payload positionally. ``closed`` payloads
        (code, reason, by_remote) are forwarded onto the bus verbatim.
        """
        ...
