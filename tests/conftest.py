from __future__ import annotations

import random
from collections import defaultdict
from typing import Any
from unittest.mock import AsyncMock

import pytest

from music_dispatcher.application.interfaces.remote_player import PlayerListener, RemotePlayer
from music_dispatcher.domain.music.value_objects import PlayerEvent

# ============================================================================
# Fakes
# ============================================================================


class FakePlayer(RemotePlayer):
    """In-memory remote player that records every command it receives."""

    def __init__(self, volume: int = 100) -> None:
        self.commands: list[tuple[Any, ...]] = []
        self.listeners: dict[PlayerEvent, list[PlayerListener]] = defaultdict(list)
        self._paused = False
        self._volume = volume

    async def play_track(self, encoded: str) -> None:
        self.commands.append(("play", encoded))

    async def set_paused(self, paused: bool) -> None:
        self._paused = paused
        self.commands.append(("pause", paused))

    async def stop_track(self) -> None:
        self.commands.append(("stop",))

    async def seek_to(self, position_ms: int) -> None:
        self.commands.append(("seek", position_ms))

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def volume(self) -> int:
        return self._volume

    def on(self, event: PlayerEvent, listener: PlayerListener) -> None:
        self.listeners[event].append(listener)

    async def emit(self, event: PlayerEvent, *payload: Any) -> None:
        for listener in list(self.listeners[event]):
            await listener(*payload)


def make_raw_payload(index: int, author: str = "Test Artist") -> dict[str, Any]:
    """A track descriptor shaped like the node's JSON."""
    return {
        "encoded": f"QAAAjQIAJVJpY2sgQXN0bGV5{index:04d}",
        "info": {
            "identifier": f"id{index:04d}",
            "isSeekable": True,
            "author": author,
            "length": 212000,
            "isStream": False,
            "position": 0,
            "title": f"Track {index}",
            "uri": f"https://www.youtube.com/watch?v=id{index:04d}",
            "artworkUrl": f"https://i.ytimg.com/vi/id{index:04d}/maxresdefault.jpg",
            "isrc": None,
            "sourceName": "youtube",
        },
        "pluginInfo": {},
    }


# ============================================================================
# Event Bus Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_global_event_bus():
    """Keep the process-wide bus from leaking handlers between tests."""
    from music_dispatcher.domain.shared.events import reset_event_bus

    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def event_bus():
    from music_dispatcher.domain.shared.events import EventBus

    return EventBus()


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def listener():
    from music_dispatcher.domain.music.entities import Requester

    return Requester(id=222222222, name="Listener")


@pytest.fixture
def bot_user():
    from music_dispatcher.domain.music.entities import Requester

    return Requester(id=111111111, name="MusicBot", is_bot=True)


@pytest.fixture
def make_song(listener):
    """Build a Song for the listener from a numbered payload."""
    from music_dispatcher.domain.music.entities import Song

    def _make(index: int, author: str = "Test Artist"):
        return Song.build(make_raw_payload(index, author), listener)

    return _make


# ============================================================================
# Dispatcher Fixtures
# ============================================================================


@pytest.fixture
def dispatcher_settings():
    from music_dispatcher.config.settings import DispatcherSettings

    return DispatcherSettings()


@pytest.fixture
def session_registry():
    from music_dispatcher.application.services.session_registry import SessionRegistry

    return SessionRegistry()


@pytest.fixture
def node():
    mock = AsyncMock()
    mock.resolve.return_value = None
    return mock


@pytest.fixture
def voice_gateway():
    return AsyncMock()


@pytest.fixture
def make_dispatcher(node, voice_gateway, session_registry, event_bus, bot_user, dispatcher_settings):
    """Factory for registered dispatchers sharing the test's collaborators."""
    from music_dispatcher.application.services.dispatcher import Dispatcher

    def _make(
        *,
        guild_id: int = 123456789,
        player: RemotePlayer | None = None,
        register: bool = True,
        rng: random.Random | None = None,
        settings=None,
    ) -> Dispatcher:
        dispatcher = Dispatcher(
            guild_id=guild_id,
            text_channel_id=555555555,
            voice_channel_id=666666666,
            player=player,
            node=node,
            voice_gateway=voice_gateway,
            registry=session_registry,
            event_bus=event_bus,
            bot_user=bot_user,
            settings=settings or dispatcher_settings,
            rng=rng or random.Random(1234),
        )
        if register:
            session_registry.insert(guild_id, dispatcher)
        return dispatcher

    return _make


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def dispatcher(make_dispatcher, player):
    return make_dispatcher(player=player)
