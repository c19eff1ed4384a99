"""Immutable value objects for the playback bounded context."""

from __future__ import annotations

from enum import Enum


class LoopMode(Enum):
    """Loop mode settings for a dispatcher."""

    OFF = "off"
    REPEAT = "repeat"  # Replay the finished track
    QUEUE = "queue"  # Send the finished track to the back of the queue


class PlayerEvent(Enum):
    """Notifications emitted by the remote player."""

    START = "start"
    END = "end"
    STUCK = "stuck"
    CLOSED = "closed"


class LoadType(Enum):
    """Result kinds returned by the audio node's resolve endpoint."""

    TRACK = "track"
    PLAYLIST = "playlist"
    SEARCH = "search"
    EMPTY = "empty"
    ERROR = "error"
