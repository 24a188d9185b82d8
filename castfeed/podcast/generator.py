"""Podcast feed generation with cache reuse."""

import logging
from datetime import datetime, timezone

from castfeed.config import Settings, get_settings
from castfeed.content.models import Section
from castfeed.errors import CacheReadFailure
from castfeed.publishing import PublishingContext

from .cache import CacheRecord, CacheStore, cache_file_name, get_cache_store
from .feed import assemble_feed, render_feed
from .models import PodcastFeedConfiguration
from .renderer import ItemMutation, render_items
from .selection import ItemPredicate, select_items
from .validation import cache_miss_reason, reusable_feed

logger = logging.getLogger(__name__)


async def generate(
    section: Section,
    config: PodcastFeedConfiguration,
    context: PublishingContext,
    *,
    exclude: ItemPredicate | None = None,
    mutate: ItemMutation | None = None,
    date: datetime | None = None,
    formatted_date: str | None = None,
    store: CacheStore | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Generate a podcast feed for a section and write it to its target path.

    If the previous run's cache record is still valid (same configuration,
    same number of items, and no item modified since the last generation),
    the cached feed is written verbatim and the cache is left untouched.
    Otherwise every item is rendered concurrently, the feed is assembled
    and serialized, a fresh cache record is saved, and the feed is written.

    Args:
        section: Section whose items make up the feed
        config: Feed configuration
        context: Publishing context (site, output directory, last generation date)
        exclude: Optional predicate returning True for items to leave out
        mutate: Optional hook applied to a copy of each item before rendering
        date: Generation timestamp (defaults to now)
        formatted_date: Pre-formatted generation timestamp, used verbatim
        store: Cache store (defaults to the configured backend)
        settings: Engine settings (defaults to get_settings())

    Returns:
        The feed text that was written

    Raises:
        PodcastError: If any selected item lacks audio, duration or size
        CacheWriteFailure: If the new cache record cannot be saved
        OutputWriteFailure: If the feed cannot be written
    """
    settings = settings or get_settings()
    store = store or get_cache_store(settings)
    cache_name = cache_file_name(config.target_path)

    try:
        old_cache = await store.load(cache_name)
    except CacheReadFailure:
        logger.warning(
            f"Ignoring unreadable cache record for {config.target_path}",
            exc_info=True,
            extra={"target_path": config.target_path},
        )
        old_cache = None

    items = select_items(section.items, exclude=exclude, limit=config.maximum_item_count)

    cached_feed = reusable_feed(old_cache, config, items, context.last_generation_date)
    if cached_feed is not None:
        logger.info(
            f"Reusing cached feed for {config.target_path}",
            extra={"target_path": config.target_path, "item_count": len(items)},
        )
        await context.write_output(config.target_path, cached_feed)
        return cached_feed

    reason = cache_miss_reason(old_cache, config, items, context.last_generation_date)
    logger.info(
        f"Regenerating feed for {config.target_path}: {reason}",
        extra={"target_path": config.target_path, "reason": reason},
    )

    entries = await render_items(
        items,
        config,
        context.site,
        mutate=mutate,
        concurrency=settings.render_concurrency,
    )
    root = assemble_feed(
        config,
        context.site,
        entries,
        date or datetime.now(timezone.utc),
        section_path=section.path,
        formatted_date=formatted_date,
    )
    feed = render_feed(root, config.indentation)

    await store.save(cache_name, CacheRecord(config=config, feed=feed, item_count=len(entries)))
    await context.write_output(config.target_path, feed)

    logger.info(
        f"Generated feed for {config.target_path} with {len(entries)} items",
        extra={"target_path": config.target_path, "item_count": len(entries)},
    )
    return feed
