"""Reusable Pydantic Annotated types for dispatcher-wide validation.

Constrained types used across the package are defined here once, so models
can simply annotate their fields::

    from music_dispatcher.domain.shared.types import DiscordSnowflake, NonEmptyStr

    class MyModel(BaseModel):
        guild_id: DiscordSnowflake
        name: NonEmptyStr
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

DurationMs = Annotated[int, Field(ge=0)]
"""Track length or position in milliseconds, as reported by the audio node."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

EncodedTrackStr = Annotated[str, Field(min_length=1)]
"""Opaque base64 track blob produced by the audio node."""


# ── Settings-specific constraints ──────────────────────────────────

HistoryLimit = Annotated[int, Field(ge=1, le=1000)]
"""History ring size: 1 … 1 000."""

AutoplayAttempts = Annotated[int, Field(ge=1, le=100)]
"""Random draws per autoplay resolution: 1 … 100."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""


def utcnow() -> datetime:
    return datetime.now(UTC)
