"""Tests for cache validity decisions."""

from datetime import datetime, timedelta

import pytest

from castfeed.podcast.cache import CacheRecord
from castfeed.podcast.selection import select_items
from castfeed.podcast.validation import cache_miss_reason, reusable_feed


@pytest.fixture
def selected(items):
    return select_items(items)


@pytest.fixture
def last_generation(base_date):
    """A last generation date after every item in the items fixture."""
    return base_date + timedelta(days=10)


@pytest.fixture
def record(config):
    return CacheRecord(config=config, feed="<rss>cached</rss>", item_count=3)


def test_valid_cache_is_reused(record, config, selected, last_generation):
    assert cache_miss_reason(record, config, selected, last_generation) is None
    assert reusable_feed(record, config, selected, last_generation) == "<rss>cached</rss>"


def test_no_record_is_a_miss(config, selected, last_generation):
    assert cache_miss_reason(None, config, selected, last_generation) == "no cache record"
    assert reusable_feed(None, config, selected, last_generation) is None


def test_no_last_generation_date_is_a_miss(record, config, selected):
    """Without a last generation date the cache is never trusted."""
    assert cache_miss_reason(record, config, selected, None) == "no last generation date"
    assert reusable_feed(record, config, selected, None) is None


def test_changed_config_is_a_miss(record, config, selected, last_generation):
    changed = config.model_copy(update={"title": "Another Title"})

    assert cache_miss_reason(record, changed, selected, last_generation) == "configuration changed"


def test_equal_config_instances_are_interchangeable(record, config, selected, last_generation):
    """A separately built config with the same values reuses the cache."""
    rebuilt = type(config).model_validate(config.model_dump())

    assert rebuilt is not config
    assert reusable_feed(record, rebuilt, selected, last_generation) == "<rss>cached</rss>"


@pytest.mark.parametrize("count", [2, 4])
def test_changed_item_count_is_a_miss(config, selected, last_generation, count):
    record = CacheRecord(config=config, feed="x", item_count=count)

    assert cache_miss_reason(record, config, selected, last_generation) == "item count changed"


def test_item_modified_after_last_generation_is_a_miss(record, config, selected, last_generation):
    selected[1] = selected[1].model_copy(
        update={"last_modified": last_generation + timedelta(seconds=1)}
    )

    reason = cache_miss_reason(record, config, selected, last_generation)

    assert reason == f"item modified: {selected[1].path}"


def test_item_modified_exactly_at_last_generation_is_reused(
    record, config, selected, last_generation
):
    """Only strictly newer modifications invalidate the cache."""
    selected[0] = selected[0].model_copy(update={"last_modified": last_generation})

    assert reusable_feed(record, config, selected, last_generation) == "<rss>cached</rss>"


def test_naive_dates_compare_as_utc(record, config, selected, last_generation):
    naive = last_generation.replace(tzinfo=None)

    assert reusable_feed(record, config, selected, naive) == "<rss>cached</rss>"

    selected[2] = selected[2].model_copy(
        update={"last_modified": datetime(2030, 1, 1)}
    )
    assert reusable_feed(record, config, selected, last_generation) is None
