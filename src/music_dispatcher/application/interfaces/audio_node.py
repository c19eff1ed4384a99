"""Port interface for searching the remote audio node."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from music_dispatcher.domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from ...domain.music.entities import LoadResult


class AudioNode(ABC):
    """Interface for the node's resolve endpoint."""

    @abstractmethod
    async def resolve(self, query: NonEmptyStr) -> "LoadResult | None":
        """Resolve a URL or ``<engine>:<terms>`` search.

        Returns None when the node gave no response at all.
        """
        ...
