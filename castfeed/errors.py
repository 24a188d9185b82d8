"""Errors raised while generating a podcast feed."""

from enum import Enum


class PodcastErrorReason(str, Enum):
    """Why an item could not be included in a podcast feed."""

    MISSING_AUDIO = "missing audio"
    MISSING_AUDIO_DURATION = "missing audio duration"
    MISSING_AUDIO_SIZE = "missing audio size"


class PodcastError(Exception):
    """An item failed validation while being rendered into a podcast feed."""

    reason: PodcastErrorReason

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Item at '{path}' cannot be used in a podcast feed: {self.reason.value}")


class MissingAudio(PodcastError):
    reason = PodcastErrorReason.MISSING_AUDIO


class MissingAudioDuration(PodcastError):
    reason = PodcastErrorReason.MISSING_AUDIO_DURATION


class MissingAudioSize(PodcastError):
    reason = PodcastErrorReason.MISSING_AUDIO_SIZE


class FeedGenerationError(Exception):
    """Base class for storage failures during feed generation."""


class CacheReadFailure(FeedGenerationError):
    """A cache record exists but could not be read or decoded."""


class CacheWriteFailure(FeedGenerationError):
    """A fresh cache record could not be persisted."""


class OutputWriteFailure(FeedGenerationError):
    """The feed could not be written to its output location."""
