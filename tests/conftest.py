"""Shared fixtures for castfeed tests."""

from datetime import datetime, timedelta, timezone

import pytest

import castfeed.config
import castfeed.podcast.cache
from castfeed.config import Settings
from castfeed.content.models import Audio, Item, PodcastEpisodeMetadata, Section, Site
from castfeed.podcast.models import PodcastAuthor, PodcastFeedConfiguration


def make_item(
    path: str,
    date: datetime,
    last_modified: datetime | None = None,
    with_audio: bool = True,
    duration: timedelta | None = timedelta(minutes=42, seconds=5),
    byte_size: int | None = 1_234_567,
    **kwargs,
) -> Item:
    """Helper to create an Item for testing."""
    audio = None
    if with_audio:
        audio = Audio(
            url=f"https://cdn.example.com/{path}.mp3",
            duration=duration,
            byte_size=byte_size,
        )
    return Item(
        path=path,
        title=f"Episode {path}",
        description=f"About {path}",
        body=f"<p>Notes for {path}</p>",
        date=date,
        last_modified=last_modified or date,
        audio=audio,
        **kwargs,
    )


@pytest.fixture
def item_factory():
    """Expose make_item to tests."""
    return make_item


@pytest.fixture
def site():
    """A site with a fixed URL and time zone."""
    return Site(
        name="Test Cast",
        description="A podcast about tests",
        url="https://example.com",
        language="en",
        time_zone="UTC",
    )


@pytest.fixture
def config():
    """A complete podcast feed configuration."""
    return PodcastFeedConfiguration(
        target_path="podcast/feed.rss",
        description="A podcast about tests",
        subtitle="Tests, weekly",
        author=PodcastAuthor(name="Jane Host", email_address="jane@example.com"),
        image_url="https://example.com/cover.png",
        copyright_text="Copyright 2024 Test Cast",
        category="Technology",
    )


@pytest.fixture
def base_date():
    return datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def items(base_date):
    """Three items dated D1 < D2 < D3, given oldest first."""
    return [
        make_item(
            f"episodes/{n}",
            base_date + timedelta(days=n),
            podcast=PodcastEpisodeMetadata(episode_number=n),
        )
        for n in (1, 2, 3)
    ]


@pytest.fixture
def section(items):
    return Section(path="podcast", title="Podcast", items=items)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at temporary cache and output directories."""
    return Settings(
        cache_dir=str(tmp_path / "cache"),
        output_dir=str(tmp_path / "output"),
        render_concurrency=4,
    )


@pytest.fixture(autouse=True)
def reset_settings_singleton():
    """Ensure each test starts without a cached Settings instance."""
    castfeed.config._settings = None
    yield
    castfeed.config._settings = None


@pytest.fixture(autouse=True)
def reset_redis_clients():
    """Ensure each test starts without shared Redis clients."""
    castfeed.podcast.cache._redis_clients.clear()
    yield
    castfeed.podcast.cache._redis_clients.clear()
