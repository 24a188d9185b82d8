"""Pydantic models for the content a podcast feed is generated from."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, HttpUrl, field_validator


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AudioFormat(str, Enum):
    """Audio container formats that can be attached to an item."""

    MP3 = "mp3"
    M4A = "m4a"
    AAC = "aac"
    WAV = "wav"
    OGG = "ogg"
    FLAC = "flac"
    AIFF = "aiff"


class Audio(BaseModel):
    """Audio file attached to an item.

    Duration and byte size are optional on the model since not every item
    carries them, but both are required for the item to appear in a podcast.
    """

    url: HttpUrl
    format: AudioFormat = AudioFormat.MP3
    duration: timedelta | None = None
    byte_size: int | None = Field(default=None, ge=0)


class TranscriptMimeType(str, Enum):
    """Transcript formats defined by the podcast namespace."""

    SRT = "application/srt"
    VTT = "text/vtt"
    JSON = "application/json"
    HTML = "text/html"


class Transcript(BaseModel):
    """A transcript for an episode, as in the podcast namespace extension."""

    url: HttpUrl
    mime_type: TranscriptMimeType
    language: str | None = None
    rel: str | None = Field(default=None, pattern="^captions$")


class PodcastEpisodeMetadata(BaseModel):
    """Podcast-specific metadata for a single item."""

    is_explicit: bool | None = None
    episode_number: int | None = None
    season_number: int | None = None
    transcripts: list[Transcript] = Field(default_factory=list)


class ItemRSSProperties(BaseModel):
    """Per-item overrides applied when an item is rendered into a feed."""

    guid: str | None = None
    title_prefix: str = ""
    title_suffix: str = ""
    body_prefix: str = ""
    body_suffix: str = ""
    link: HttpUrl | None = None


class Item(BaseModel):
    """A single content item that may be included in a feed."""

    path: str
    title: str
    description: str = ""
    body: str = ""
    date: datetime
    last_modified: datetime
    image_path: str | None = None
    audio: Audio | None = None
    podcast: PodcastEpisodeMetadata | None = None
    rss: ItemRSSProperties = Field(default_factory=ItemRSSProperties)

    @property
    def rss_title(self) -> str:
        return f"{self.rss.title_prefix}{self.title}{self.rss.title_suffix}"


class Site(BaseModel):
    """Website-level data used to resolve links, language and time zone."""

    name: str
    description: str = ""
    url: HttpUrl
    language: str = "en"
    time_zone: str = "UTC"

    @field_validator("time_zone")
    @classmethod
    def validate_time_zone(cls, v: str) -> str:
        """Reject names missing from the IANA time zone database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    def url_for(self, path: str) -> str:
        """Return the absolute URL for a site-relative path."""
        base = str(self.url).rstrip("/")
        path = path.strip("/")
        return f"{base}/{path}" if path else base


class Section(BaseModel):
    """A section of the site, owning the items a feed is built from."""

    path: str
    title: str = ""
    items: list[Item] = Field(default_factory=list)
