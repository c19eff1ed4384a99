"""Bus subscriber that moves a session on to its next track when one ends."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.events import TrackEnd

if TYPE_CHECKING:
    from ...domain.shared.events import EventBus
    from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class AutoAdvance:
    """Subscribes to TrackEnd and calls ``Dispatcher.advance`` on the sender.

    skip(), previous_track() and stop() only stop the remote track; the
    follow-up happens here once the node reports the end.
    """

    def __init__(self, *, event_bus: EventBus) -> None:
        self._bus = event_bus
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        if self._started:
            return
        self._bus.subscribe(TrackEnd, self._on_track_end)
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._bus.unsubscribe(TrackEnd, self._on_track_end)
        self._started = False

    async def _on_track_end(self, event: TrackEnd) -> None:
        dispatcher: Dispatcher | None = event.dispatcher
        if dispatcher is None:
            return

        try:
            await dispatcher.advance()
        except Exception:
            logger.exception("Queue advance failed for guild %s", event.guild_id)
