"""Track records and node responses for the playback bounded context."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from music_dispatcher.domain.music.value_objects import LoadType
from music_dispatcher.domain.shared.exceptions import InvalidTrackError
from music_dispatcher.domain.shared.messages import ErrorMessages
from music_dispatcher.domain.shared.types import (
    DiscordSnowflake,
    DurationMs,
    EncodedTrackStr,
    NonEmptyStr,
)


class Requester(BaseModel):
    """The chat user a track was queued for."""

    model_config = ConfigDict(frozen=True)

    id: DiscordSnowflake
    name: NonEmptyStr
    is_bot: bool = False


class RawTrackInfo(BaseModel):
    """Track metadata exactly as the audio node reports it."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    identifier: str
    title: str
    author: str
    length: DurationMs = 0
    is_seekable: bool = True
    is_stream: bool = False
    position: DurationMs = 0
    source_name: str = "unknown"
    uri: str | None = None
    artwork_url: str | None = None
    isrc: str | None = None


class RawTrack(BaseModel):
    """A track descriptor returned by a node search, not yet bound to a requester."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    encoded: EncodedTrackStr
    info: RawTrackInfo
    plugin_info: dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("pluginInfo", "plugin_info")
    )


class SongInfo(RawTrackInfo):
    """Node metadata plus the user who requested the track."""

    requester: Requester


class Song(BaseModel):
    """Immutable value object representing a queued or playing track."""

    model_config = ConfigDict(frozen=True)

    encoded: EncodedTrackStr
    info: SongInfo
    plugin_info: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def build(cls, source: RawTrack | Song | Mapping[str, Any] | None, requester: Requester) -> Song:
        """Bind *source* to *requester*.

        Raw node payloads (mappings) are validated into a ``RawTrack`` first.
        """
        if source is None:
            raise InvalidTrackError()

        if isinstance(source, Mapping):
            source = RawTrack.model_validate(source)

        if isinstance(source, Song):
            info = source.info.model_copy(update={"requester": requester})
        elif isinstance(source, RawTrack):
            info = SongInfo(**source.info.model_dump(), requester=requester)
        else:
            raise InvalidTrackError(
                ErrorMessages.UNSUPPORTED_TRACK_SOURCE.format(type_name=type(source).__name__)
            )

        return cls(encoded=source.encoded, info=info, plugin_info=dict(source.plugin_info))

    @property
    def requester(self) -> Requester:
        return self.info.requester

    @property
    def duration_formatted(self) -> str:
        """Format length as MM:SS or HH:MM:SS."""
        if self.info.is_stream:
            return "Live"

        hours, remainder = divmod(self.info.length // 1000, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        return f"{self.info.title} - {self.info.author} [{self.duration_formatted}]"

    def same_as(self, other: Song) -> bool:
        """Two records are the same track when their encoded payloads match."""
        return self.encoded == other.encoded


class LoadResult(BaseModel):
    """Response of the node's resolve endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    load_type: str = Field(
        default=LoadType.EMPTY.value, validation_alias=AliasChoices("loadType", "load_type")
    )
    data: Any = None

    @property
    def is_error(self) -> bool:
        return self.load_type == LoadType.ERROR.value

    @property
    def tracks(self) -> list[RawTrack] | None:
        """Track descriptors parsed from ``data``.

        Entries that do not parse are skipped. Returns None when ``data`` is
        not a sequence, or when it had entries and none of them parsed.
        """
        if isinstance(self.data, (str, bytes)) or not isinstance(self.data, Sequence):
            return None

        tracks: list[RawTrack] = []
        for item in self.data:
            if isinstance(item, RawTrack):
                tracks.append(item)
                continue
            try:
                tracks.append(RawTrack.model_validate(item))
            except ValidationError:
                continue

        if self.data and not tracks:
            return None
        return tracks
