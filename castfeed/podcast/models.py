"""Pydantic models for podcast feed configuration and rendered entries."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from castfeed.content.models import Transcript


class PodcastType(str, Enum):
    """Podcast presentation type, as understood by podcast directories."""

    EPISODIC = "episodic"
    SERIAL = "serial"


class Indentation(BaseModel):
    """How the serialized feed should be indented."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(default="spaces", pattern="^(spaces|tabs)$")
    count: int = Field(default=4, ge=0)

    @property
    def unit(self) -> str:
        return (" " if self.kind == "spaces" else "\t") * self.count


class PodcastAuthor(BaseModel):
    """The person or organization publishing the podcast."""

    model_config = ConfigDict(frozen=True)

    name: str
    email_address: str


class PodcastFeedConfiguration(BaseModel):
    """Configuration used to customize how a podcast feed is generated.

    Instances compare by value, so a configuration decoded from a cache
    record equals the one it was encoded from.
    """

    model_config = ConfigDict(frozen=True)

    target_path: str = "feed.rss"
    title: str | None = None
    description: str
    subtitle: str
    author: PodcastAuthor
    image_url: HttpUrl
    copyright_text: str
    category: str
    subcategory: str | None = None
    is_explicit: bool = False
    type: PodcastType = PodcastType.EPISODIC
    ttl_interval: int = Field(default=250, ge=0)
    maximum_item_count: int | None = Field(default=None, ge=0)
    indentation: Indentation | None = None
    link_url: HttpUrl | None = None
    new_feed_url: HttpUrl | None = None
    web_sub_hub_url: HttpUrl | None = None


class Enclosure(BaseModel):
    """The media file attached to a feed entry."""

    url: str
    length: int
    type: str
    title: str


class PodcastEntry(BaseModel):
    """A validated item, ready to be placed into a feed document."""

    guid: str
    guid_is_permalink: bool = True
    title: str
    description: str
    link: str
    pub_date: str
    content: str
    author: str
    is_explicit: bool = False
    duration: str
    image_url: str | None = None
    episode_number: int | None = None
    season_number: int | None = None
    transcripts: list[Transcript] = Field(default_factory=list)
    enclosure: Enclosure
