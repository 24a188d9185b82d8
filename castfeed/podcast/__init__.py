"""Podcast feed generation module for castfeed."""

from .cache import CacheRecord, FileCacheStore, RedisCacheStore, cache_file_name, close_redis
from .generator import generate
from .models import Indentation, PodcastAuthor, PodcastFeedConfiguration, PodcastType

__all__ = [
    "CacheRecord",
    "FileCacheStore",
    "Indentation",
    "PodcastAuthor",
    "PodcastFeedConfiguration",
    "PodcastType",
    "RedisCacheStore",
    "cache_file_name",
    "close_redis",
    "generate",
]
