"""Per-voice-session dispatcher: queue, history, mode flags and player control."""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ...domain.music.entities import RawTrack, Requester, Song
from ...domain.music.services import AutoplayDomainService, QueueDomainService
from ...domain.music.value_objects import LoopMode, PlayerEvent
from ...domain.shared.events import (
    PlayerDestroy,
    QueueEnd,
    SocketClosed,
    TrackEnd,
    TrackStart,
    TrackStuck,
)
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake, NonNegativeInt

if TYPE_CHECKING:
    from ...config.settings import DispatcherSettings
    from ...domain.shared.events import EventBus
    from ..interfaces.audio_node import AudioNode
    from ..interfaces.remote_player import RemotePlayer
    from ..interfaces.voice_gateway import VoiceGateway
    from .session_registry import SessionRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Owns one guild's playback state and drives its remote player.

    The queue holds upcoming tracks only; ``current`` is never in it. Every
    started track is appended to ``history``, a ring of ``history_limit``
    entries. Player notifications are republished on the event bus.
    """

    def __init__(
        self,
        *,
        guild_id: DiscordSnowflake,
        text_channel_id: DiscordSnowflake,
        voice_channel_id: DiscordSnowflake,
        player: RemotePlayer | None,
        node: AudioNode,
        voice_gateway: VoiceGateway,
        registry: SessionRegistry,
        event_bus: EventBus,
        bot_user: Requester,
        settings: DispatcherSettings,
        rng: random.Random | None = None,
    ) -> None:
        self.guild_id = guild_id
        self.text_channel_id = text_channel_id
        self.voice_channel_id = voice_channel_id
        self.player = player
        self.node = node

        self._voice_gateway = voice_gateway
        self._registry = registry
        self._bus = event_bus
        self._bot_user = bot_user
        self._settings = settings
        self._rng = rng

        self.queue: list[Song] = []
        self.history: deque[Song] = deque(maxlen=settings.history_limit)
        self.current: Song | None = None
        self.previous: Song | None = None
        self.loop = LoopMode.OFF
        self.repeat = 0
        self.autoplay = False
        self.paused = False
        self.stopped = False
        self.filters: list[str] = []
        self.now_playing_message_id: DiscordSnowflake | None = None

        self._destroyed = False
        # Set by skip() and previous_track() so the next advance ignores REPEAT.
        self._bypass_repeat = False

        if player is not None:
            player.on(PlayerEvent.START, self._on_start)
            player.on(PlayerEvent.END, self._on_end)
            player.on(PlayerEvent.STUCK, self._on_stuck)
            player.on(PlayerEvent.CLOSED, self._on_closed)

    # === State ===

    @property
    def exists(self) -> bool:
        """Whether the registry still holds a session for this guild."""
        return self._registry.has(self.guild_id)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def volume(self) -> int | None:
        if self.player is None:
            return None
        return self.player.volume

    def build_track(self, source: RawTrack | Song | Mapping[str, Any] | None, requester: Requester) -> Song:
        return Song.build(source, requester)

    # === Playback control ===

    async def play(self) -> None:
        """Start the queue head, or restart ``current`` when the queue is empty."""
        if not self.exists:
            logger.debug(LogTemplates.PLAY_SKIPPED_NOT_REGISTERED, self.guild_id)
            return

        if not self.queue and self.current is None:
            logger.debug(LogTemplates.PLAY_SKIPPED_NOTHING_QUEUED, self.guild_id)
            return

        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "play()", self.guild_id)
            return

        if self.queue:
            self.current = self.queue.pop(0)

        track = self.current
        if track is None:
            return

        logger.info(LogTemplates.TRACK_STARTING, track.display_title, self.guild_id)
        await self.player.play_track(track.encoded)
        self.history.append(track)

    async def pause(self) -> None:
        """Toggle pause; each call sends one command to the player."""
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "pause()", self.guild_id)
            return

        self.paused = not self.paused
        await self.player.set_paused(self.paused)
        logger.debug(LogTemplates.PAUSE_TOGGLED, self.guild_id, self.paused)

    def remove(self, index: int) -> Song | None:
        """Remove the queue entry at *index*. Out-of-range indices are ignored."""
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "remove()", self.guild_id)
            return None

        if not 0 <= index < len(self.queue):
            return None

        song = self.queue.pop(index)
        logger.debug(LogTemplates.TRACK_REMOVED, song.info.title, index, self.guild_id)
        return song

    async def previous_track(self) -> None:
        """Put the last finished track back at the head and end the current one."""
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "previous_track()", self.guild_id)
            return

        if self.previous is None:
            return

        self.queue.insert(0, self.previous)
        logger.info(LogTemplates.PREVIOUS_REQUEUED, self.previous.info.title, self.guild_id)
        if self.current is not None:
            self._bypass_repeat = True
        await self.player.stop_track()

    def set_shuffle(self) -> None:
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "set_shuffle()", self.guild_id)
            return

        QueueDomainService.shuffle(self.queue, self._rng)
        logger.debug(LogTemplates.QUEUE_SHUFFLED, len(self.queue), self.guild_id)

    async def skip(self, count: int = 1) -> None:
        """End the current track, dropping ``count - 1`` queued tracks first."""
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "skip()", self.guild_id)
            return

        QueueDomainService.drop_for_skip(self.queue, count)
        if self.repeat == 1:
            self.repeat = 0

        if self.current is not None:
            self._bypass_repeat = True
        logger.info(LogTemplates.TRACKS_SKIPPED, max(count, 1), self.guild_id)
        await self.player.stop_track()

    async def seek(self, position_ms: NonNegativeInt) -> None:
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "seek()", self.guild_id)
            return

        await self.player.seek_to(position_ms)

    async def stop(self) -> None:
        """Clear everything, reset modes and latch ``stopped`` for destroy()."""
        if self.player is None:
            logger.debug(LogTemplates.PLAYER_MISSING, "stop()", self.guild_id)
            return

        self.queue.clear()
        self.history.clear()
        self.loop = LoopMode.OFF
        self.autoplay = False
        self.repeat = 0
        self.stopped = True
        await self.player.stop_track()
        logger.info(LogTemplates.PLAYBACK_STOPPED, self.guild_id)

    def set_loop(self, mode: LoopMode | str) -> None:
        """Set the loop mode. Unknown values raise ValueError."""
        self.loop = LoopMode(mode)
        logger.debug(LogTemplates.LOOP_SET, self.guild_id, self.loop.value)

    async def ensure_playing(self) -> None:
        """Start playback if tracks are waiting but nothing is loaded."""
        if self.player is None:
            return

        if self.queue and self.current is None and not self.player.paused:
            await self.play()

    async def advance(self) -> None:
        """Move past the track that just ended.

        Applies the loop mode to the finished track, then either resolves an
        autoplay pick (empty queue, autoplay on) or starts the next entry.
        """
        if self._destroyed or not self.exists:
            return

        finished = self.current
        bypass_repeat = self._bypass_repeat
        self._bypass_repeat = False

        if finished is not None:
            self.previous = finished
            if self.loop is LoopMode.REPEAT and not bypass_repeat:
                self.queue.insert(0, finished)
            elif self.loop is LoopMode.QUEUE:
                self.queue.append(finished)

        self.current = None
        logger.debug(LogTemplates.QUEUE_ADVANCED, self.guild_id, self.loop.value, len(self.queue))

        if not self.queue and self.autoplay and self.previous is not None:
            await self.resolve_autoplay(self.previous)
            return

        await self.play()

    async def destroy(self) -> None:
        """Tear the session down: clear state, leave voice, unregister.

        ``PlayerDestroy`` is published unless the session was stopped first.
        """
        if self._destroyed:
            logger.debug(LogTemplates.DISPATCHER_ALREADY_DESTROYED, self.guild_id)
            return

        self._destroyed = True
        self.queue.clear()
        self.history.clear()

        try:
            await self._voice_gateway.leave_voice_channel(self.guild_id)
        finally:
            if self._registry.lookup(self.guild_id) is self:
                self._registry.remove(self.guild_id)

        logger.info(LogTemplates.DISPATCHER_DESTROYED, self.guild_id, not self.stopped)
        if self.stopped:
            return

        await self._bus.publish(PlayerDestroy(guild_id=self.guild_id, player=self.player))

    # === Autoplay ===

    async def set_autoplay(self, enabled: bool) -> None:
        """Toggle autoplay; enabling resolves a pick right away."""
        self.autoplay = enabled
        if not enabled:
            logger.info(LogTemplates.AUTOPLAY_DISABLED, self.guild_id)
            return

        logger.info(LogTemplates.AUTOPLAY_ENABLED, self.guild_id)
        seed = self.current or (self.queue[0] if self.queue else None)
        if seed is None:
            logger.warning(LogTemplates.AUTOPLAY_NO_SEED, self.guild_id)
            return

        await self.resolve_autoplay(seed)

    async def resolve_autoplay(self, seed: Song) -> None:
        """Queue one track by the seed's author that is not queued or in history.

        An unusable node response or a spent draw budget tears the session down.
        """
        query = AutoplayDomainService.build_query(self._settings.search_engine, seed)
        logger.debug(LogTemplates.AUTOPLAY_QUERY, query, self.guild_id)

        result = await self.node.resolve(query)

        # destroy() may have run while the node was answering.
        if self._destroyed:
            logger.info(LogTemplates.AUTOPLAY_STALE, self.guild_id)
            return

        if result is not None and result.is_error:
            logger.warning(LogTemplates.AUTOPLAY_NODE_ERROR, query, self.guild_id, result.data)

        candidates = result.tracks if result is not None else None
        if not candidates:
            logger.warning(LogTemplates.AUTOPLAY_BAD_RESPONSE, query, self.guild_id)
            await self.destroy()
            return

        pick = AutoplayDomainService.pick_unique(
            candidates,
            requester=self._bot_user,
            exclude=[*self.queue, *self.history],
            max_attempts=self._settings.autoplay_max_attempts,
            rng=self._rng,
        )
        if pick.song is None:
            logger.warning(LogTemplates.AUTOPLAY_EXHAUSTED, pick.attempts, self.guild_id)
            await self.destroy()
            return

        self.queue.append(pick.song)
        logger.info(LogTemplates.AUTOPLAY_PICKED, pick.song.info.title, self.guild_id, pick.attempts)
        await self.ensure_playing()

    # === Player notifications ===

    async def _on_start(self, *_: Any) -> None:
        await self._bus.publish(
            TrackStart(guild_id=self.guild_id, player=self.player, track=self.current, dispatcher=self)
        )

    async def _on_end(self, *_: Any) -> None:
        if not self.queue:
            await self._bus.publish(
                QueueEnd(guild_id=self.guild_id, player=self.player, track=self.current, dispatcher=self)
            )
        await self._bus.publish(
            TrackEnd(guild_id=self.guild_id, player=self.player, track=self.current, dispatcher=self)
        )

    async def _on_stuck(self, *_: Any) -> None:
        await self._bus.publish(TrackStuck(guild_id=self.guild_id, player=self.player, track=self.current))

    async def _on_closed(self, *details: Any) -> None:
        await self._bus.publish(SocketClosed(guild_id=self.guild_id, player=self.player, details=details))
