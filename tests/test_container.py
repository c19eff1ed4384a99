"""
Unit Tests for Dependency Injection Container

Tests for:
- Lazy initialization and caching of shared components
- Dispatcher creation and registration
- Lifecycle methods (initialize, shutdown)
"""

import random
from unittest.mock import AsyncMock, patch

import pytest
from conftest import FakePlayer

from music_dispatcher.application.services.auto_advance import AutoAdvance
from music_dispatcher.application.services.dispatcher import Dispatcher
from music_dispatcher.application.services.session_registry import SessionRegistry
from music_dispatcher.config.container import Container, create_container
from music_dispatcher.config.settings import DispatcherSettings, Settings
from music_dispatcher.domain.shared.events import TrackEnd, get_event_bus


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        log_level="DEBUG",
        dispatcher=DispatcherSettings(search_engine="scsearch", history_limit=10),
    )


@pytest.fixture
def container(settings):
    return Container(settings=settings)


class TestContainerComponents:
    def test_event_bus_is_process_wide(self, container):
        assert container.event_bus is get_event_bus()

    def test_components_are_cached(self, container):
        assert isinstance(container.session_registry, SessionRegistry)
        assert container.session_registry is container.session_registry
        assert isinstance(container.auto_advance, AutoAdvance)
        assert container.auto_advance is container.auto_advance

    def test_create_container_with_settings(self, settings):
        assert create_container(settings).settings is settings

    def test_create_container_loads_settings(self, settings):
        with patch("music_dispatcher.config.settings.get_settings", return_value=settings) as loader:
            container = create_container()

        loader.assert_called_once()
        assert container.settings is settings


class TestCreateDispatcher:
    """Tests for building session dispatchers."""

    def test_dispatcher_registered(self, container, bot_user):
        player = FakePlayer()

        dispatcher = container.create_dispatcher(
            guild_id=123456789,
            text_channel_id=555555555,
            voice_channel_id=666666666,
            player=player,
            node=AsyncMock(),
            voice_gateway=AsyncMock(),
            bot_user=bot_user,
            rng=random.Random(3),
        )

        assert isinstance(dispatcher, Dispatcher)
        assert container.session_registry.get(123456789) is dispatcher
        assert dispatcher.exists
        assert dispatcher.player is player
        assert dispatcher.history.maxlen == 10

    @pytest.mark.asyncio
    async def test_dispatcher_uses_settings_search_engine(self, container, bot_user, make_song):
        node = AsyncMock()
        node.resolve.return_value = None
        dispatcher = container.create_dispatcher(
            guild_id=123456789,
            text_channel_id=555555555,
            voice_channel_id=666666666,
            player=FakePlayer(),
            node=node,
            voice_gateway=AsyncMock(),
            bot_user=bot_user,
        )

        await dispatcher.resolve_autoplay(make_song(1, author="Artist"))

        node.resolve.assert_awaited_once_with("scsearch:Artist")
        assert not container.session_registry.has(123456789)


class TestContainerLifecycle:
    def test_initialize_starts_auto_advance(self, container):
        container.initialize()

        assert container.auto_advance.started
        assert container.event_bus.handler_count(TrackEnd) == 1

    def test_initialize_can_configure_logging(self, container):
        with patch("music_dispatcher.utils.logging.setup_logging") as setup:
            container.initialize(configure_logging=True)

        setup.assert_called_once_with("DEBUG")

    def test_initialize_leaves_logging_alone_by_default(self, container):
        with patch("music_dispatcher.utils.logging.setup_logging") as setup:
            container.initialize()

        setup.assert_not_called()

    def test_shutdown_stops_auto_advance(self, container):
        container.initialize()

        container.shutdown()

        assert not container.auto_advance.started
        assert container.event_bus.handler_count(TrackEnd) == 0

    def test_shutdown_before_initialize(self, container):
        container.shutdown()

        assert container._auto_advance is None
