"""Concurrent rendering of content items into validated podcast entries."""

import asyncio
import re
from datetime import datetime, timedelta
from email.utils import format_datetime
from typing import Callable, Sequence
from zoneinfo import ZoneInfo

from castfeed.content.models import Item, Site
from castfeed.errors import MissingAudio, MissingAudioDuration, MissingAudioSize

from .models import Enclosure, PodcastEntry, PodcastFeedConfiguration

ItemMutation = Callable[[Item], None]

# Root-relative links inside item bodies
_RELATIVE_LINK = re.compile(r'(\s(?:href|src)=")/(?!/)')


def format_rfc822(value: datetime, time_zone: str) -> str:
    """Format a datetime the way RSS pubDate elements expect.

    Naive datetimes are interpreted in the given time zone.
    """
    zone = ZoneInfo(time_zone)
    if value.tzinfo is None:
        value = value.replace(tzinfo=zone)
    return format_datetime(value.astimezone(zone))


def format_duration(duration: timedelta) -> str:
    """Format an audio duration as HH:MM:SS."""
    total = int(duration.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _absolute_url(value: str, site: Site) -> str:
    if "://" in value:
        return value
    return site.url_for(value)


def _item_content(item: Item, site: Site) -> str:
    body = f"{item.rss.body_prefix}{item.body}{item.rss.body_suffix}"
    base = str(site.url).rstrip("/")
    return _RELATIVE_LINK.sub(lambda m: f"{m.group(1)}{base}/", body)


def render_item(
    item: Item,
    config: PodcastFeedConfiguration,
    site: Site,
    mutate: ItemMutation | None = None,
) -> PodcastEntry:
    """Render a single item into a podcast entry.

    The mutation hook, if any, is applied to a deep copy of the item so the
    caller's item is never changed.

    Args:
        item: The item to render
        config: Feed configuration (author name)
        site: Site used to resolve links and the publishing time zone
        mutate: Optional hook that modifies the item copy in place

    Returns:
        A validated PodcastEntry

    Raises:
        MissingAudio: If the item has no audio attachment
        MissingAudioDuration: If the audio has no duration
        MissingAudioSize: If the audio has no byte size
    """
    if mutate is not None:
        item = item.model_copy(deep=True)
        mutate(item)

    audio = item.audio
    if audio is None:
        raise MissingAudio(item.path)
    if audio.duration is None:
        raise MissingAudioDuration(item.path)
    if audio.byte_size is None:
        raise MissingAudioSize(item.path)

    title = item.rss_title
    metadata = item.podcast
    item_url = site.url_for(item.path)

    return PodcastEntry(
        guid=item.rss.guid or item_url,
        guid_is_permalink=item.rss.guid is None,
        title=title,
        description=item.description,
        link=str(item.rss.link) if item.rss.link else item_url,
        pub_date=format_rfc822(item.date, site.time_zone),
        content=_item_content(item, site),
        author=config.author.name,
        is_explicit=bool(metadata and metadata.is_explicit),
        duration=format_duration(audio.duration),
        image_url=_absolute_url(item.image_path, site) if item.image_path else None,
        episode_number=metadata.episode_number if metadata else None,
        season_number=metadata.season_number if metadata else None,
        transcripts=list(metadata.transcripts) if metadata else [],
        enclosure=Enclosure(
            url=str(audio.url),
            length=audio.byte_size,
            type=f"audio/{audio.format.value}",
            title=title,
        ),
    )


async def render_items(
    items: Sequence[Item],
    config: PodcastFeedConfiguration,
    site: Site,
    mutate: ItemMutation | None = None,
    concurrency: int = 8,
) -> list[PodcastEntry]:
    """Render items concurrently, preserving input order.

    Each item is rendered in a worker thread, at most ``concurrency`` at a
    time. Results are written into a list addressed by input index, so the
    Nth entry always corresponds to the Nth item. The first failure cancels
    the outstanding renders and is raised as-is.

    Args:
        items: Items in feed order
        config: Feed configuration
        site: Site used to resolve links
        mutate: Optional mutation hook applied to each item copy
        concurrency: Maximum number of items rendered at the same time

    Returns:
        Entries in the same order as ``items``
    """
    if not items:
        return []

    results: list[PodcastEntry | None] = [None] * len(items)
    semaphore = asyncio.Semaphore(concurrency)

    async def worker(index: int, item: Item) -> None:
        async with semaphore:
            results[index] = await asyncio.to_thread(render_item, item, config, site, mutate)

    tasks = [asyncio.create_task(worker(i, item)) for i, item in enumerate(items)]

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()

    failed = [t for t in tasks if t in done and t.exception() is not None]
    if failed:
        await asyncio.gather(*pending, return_exceptions=True)
        raise failed[0].exception()

    return [entry for entry in results if entry is not None]
