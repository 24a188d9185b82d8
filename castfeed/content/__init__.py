"""Content model consumed by the feed generator."""

from .models import (
    Audio,
    AudioFormat,
    Item,
    ItemRSSProperties,
    PodcastEpisodeMetadata,
    Section,
    Site,
    Transcript,
    TranscriptMimeType,
)

__all__ = [
    "Audio",
    "AudioFormat",
    "Item",
    "ItemRSSProperties",
    "PodcastEpisodeMetadata",
    "Section",
    "Site",
    "Transcript",
    "TranscriptMimeType",
]
