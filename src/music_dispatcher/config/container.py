"""Dependency Injection Container

Holds the process-wide pieces every dispatcher shares (settings, event bus,
session registry, auto-advance subscriber) and builds dispatchers for new
voice sessions. Components are created on first access and cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import random

    from ..application.interfaces.audio_node import AudioNode
    from ..application.interfaces.remote_player import RemotePlayer
    from ..application.interfaces.voice_gateway import VoiceGateway
    from ..application.services.auto_advance import AutoAdvance
    from ..application.services.dispatcher import Dispatcher
    from ..application.services.session_registry import SessionRegistry
    from ..domain.music.entities import Requester
    from ..domain.shared.events import EventBus
    from ..domain.shared.types import DiscordSnowflake
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _event_bus: EventBus | None = None
    _session_registry: SessionRegistry | None = None
    _auto_advance: AutoAdvance | None = None

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    @property
    def session_registry(self) -> SessionRegistry:
        if self._session_registry is None:
            from ..application.services.session_registry import SessionRegistry

            self._session_registry = SessionRegistry()
        return self._session_registry

    @property
    def auto_advance(self) -> AutoAdvance:
        if self._auto_advance is None:
            from ..application.services.auto_advance import AutoAdvance

            self._auto_advance = AutoAdvance(event_bus=self.event_bus)
        return self._auto_advance

    def create_dispatcher(
        self,
        *,
        guild_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake,
        voice_channel_id: DiscordSnowflake,
        player: RemotePlayer,
        node: AudioNode,
        voice_gateway: VoiceGateway,
        bot_user: Requester,
        rng: random.Random | None = None,
    ) -> Dispatcher:
        """Build a dispatcher for a freshly joined voice session and register it."""
        from ..application.services.dispatcher import Dispatcher

        dispatcher = Dispatcher(
            guild_id=guild_id,
            text_channel_id=text_channel_id,
            voice_channel_id=voice_channel_id,
            player=player,
            node=node,
            voice_gateway=voice_gateway,
            registry=self.session_registry,
            event_bus=self.event_bus,
            bot_user=bot_user,
            settings=self.settings.dispatcher,
            rng=rng,
        )
        self.session_registry.insert(guild_id, dispatcher)
        return dispatcher

    def initialize(self, *, configure_logging: bool = False) -> None:
        """Start cross-cutting subscribers.

        Hosts that already own logging leave ``configure_logging`` off.
        """
        if configure_logging:
            from ..utils.logging import setup_logging

            setup_logging(self.settings.log_level)
        self.auto_advance.start()
        logger.info("Container initialized (environment=%s)", self.settings.environment)

    def shutdown(self) -> None:
        if self._auto_advance is not None:
            self._auto_advance.stop()
        logger.info("Container shut down")


def create_container(settings: Settings | None = None) -> Container:
    """Create a container from explicit or environment-loaded settings."""
    if settings is None:
        from .settings import get_settings

        settings = get_settings()
    return Container(settings=settings)
