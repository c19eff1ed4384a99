"""
Playback Bounded Context

Track records, node load results, loop modes and the queue/autoplay rules.
"""

from music_dispatcher.domain.music.entities import (
    LoadResult,
    RawTrack,
    RawTrackInfo,
    Requester,
    Song,
    SongInfo,
)
from music_dispatcher.domain.music.services import AutoplayDomainService, QueueDomainService
from music_dispatcher.domain.music.value_objects import LoadType, LoopMode, PlayerEvent

__all__ = [
    # Entities
    "Song",
    "SongInfo",
    "RawTrack",
    "RawTrackInfo",
    "Requester",
    "LoadResult",
    # Value Objects
    "LoopMode",
    "LoadType",
    "PlayerEvent",
    # Services
    "QueueDomainService",
    "AutoplayDomainService",
]
