"""Cache validity decisions for feed generation."""

from datetime import datetime
from typing import Sequence

from castfeed.content.models import Item, as_utc

from .cache import CacheRecord
from .models import PodcastFeedConfiguration


def cache_miss_reason(
    record: CacheRecord | None,
    config: PodcastFeedConfiguration,
    items: Sequence[Item],
    last_generation_date: datetime | None,
) -> str | None:
    """Explain why a cache record cannot be reused.

    Checks, in order: presence of a record and a last generation date,
    configuration equality, item count, and item modification dates.

    Returns:
        A short reason string, or None if the record can be reused
    """
    if record is None:
        return "no cache record"
    if last_generation_date is None:
        return "no last generation date"
    if record.config != config:
        return "configuration changed"
    if record.item_count != len(items):
        return "item count changed"

    since = as_utc(last_generation_date)
    modified = next((i for i in items if as_utc(i.last_modified) > since), None)
    if modified is not None:
        return f"item modified: {modified.path}"

    return None


def reusable_feed(
    record: CacheRecord | None,
    config: PodcastFeedConfiguration,
    items: Sequence[Item],
    last_generation_date: datetime | None,
) -> str | None:
    """Return the cached feed text if it can be reused verbatim, else None."""
    if cache_miss_reason(record, config, items, last_generation_date) is not None:
        return None
    return record.feed if record is not None else None
