"""
Playback Domain Services

Queue rules and the autoplay selection algorithm. Kept free of I/O so the
dispatcher can drive them around its awaits.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, MutableSequence, Sequence
from dataclasses import dataclass
from typing import TypeVar

from music_dispatcher.domain.music.entities import RawTrack, Requester, Song

T = TypeVar("T")

_default_rng = random.Random()


class QueueDomainService:
    """Domain service for queue-ordering rules."""

    @classmethod
    def shuffle(cls, queue: MutableSequence[T], rng: random.Random | None = None) -> None:
        """Fisher-Yates shuffle in place; every permutation is equally likely."""
        rng = rng or _default_rng
        for i in range(len(queue) - 1, 0, -1):
            j = rng.randint(0, i)
            queue[i], queue[j] = queue[j], queue[i]

    @classmethod
    def drop_for_skip(cls, queue: list[T], count: int) -> int:
        """Discard the entries a multi-track skip jumps over.

        The track that ends up playing is the ``count``-th one, so ``count - 1``
        queued entries are dropped, or the whole queue when it is too short.

        Returns:
            The number of entries removed.
        """
        if count <= 1:
            return 0

        if count > len(queue):
            removed = len(queue)
            queue.clear()
            return removed

        del queue[: count - 1]
        return count - 1


@dataclass(frozen=True, slots=True)
class AutoplayPick:
    """Outcome of one autoplay selection round."""

    song: Song | None
    attempts: int


class AutoplayDomainService:
    """Picks related tracks that are not already queued or recently played."""

    DEFAULT_MAX_ATTEMPTS = 10

    @classmethod
    def build_query(cls, search_engine: str, seed: Song) -> str:
        """Search the node for more tracks by the seed's author."""
        return f"{search_engine}:{seed.info.author}"

    @classmethod
    def pick_unique(
        cls,
        candidates: Sequence[RawTrack | Song],
        *,
        requester: Requester,
        exclude: Iterable[Song],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: random.Random | None = None,
    ) -> AutoplayPick:
        """Draw random candidates until one is not in *exclude*.

        Draws are independent, so the same candidate may be drawn twice and
        each draw spends one attempt.

        Args:
            candidates: The node's search results.
            requester: Who the picked track is queued for.
            exclude: Tracks already queued or in history.
            max_attempts: Draw budget.
            rng: Random source, for deterministic tests.

        Returns:
            The picked song (or None when the budget ran out) and the attempts used.
        """
        if not candidates:
            return AutoplayPick(song=None, attempts=0)

        rng = rng or _default_rng
        taken = list(exclude)

        attempts = 0
        while attempts < max_attempts:
            attempts += 1
            choice = Song.build(rng.choice(candidates), requester)
            if not any(choice.same_as(song) for song in taken):
                return AutoplayPick(song=choice, attempts=attempts)

        return AutoplayPick(song=None, attempts=attempts)
