"""Podcast feed document assembly and serialization."""

import copy
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Sequence

from castfeed.content.models import Site

from .models import Indentation, PodcastEntry, PodcastFeedConfiguration
from .renderer import format_rfc822

# XML namespaces used by podcast feeds
NAMESPACES = {
    "atom": "http://www.w3.org/2005/Atom",
    "content": "http://purl.org/rss/1.0/modules/content/",
    "itunes": "http://www.itunes.com/dtds/podcast-1.0.dtd",
    "media": "http://search.yahoo.com/mrss/",
    "podcast": "https://podcastindex.org/namespace/1.0",
}

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _tag(name: str) -> str:
    """Expand a prefixed tag name such as ``itunes:author``."""
    if ":" not in name:
        return name
    prefix, local = name.split(":", 1)
    return f"{{{NAMESPACES[prefix]}}}{local}"


def _element(
    parent: ET.Element, name: str, value: str | None = None, **attributes: str
) -> ET.Element:
    element = ET.SubElement(parent, _tag(name), attributes)
    if value is not None:
        element.text = value
    return element


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _append_entry(channel: ET.Element, entry: PodcastEntry) -> None:
    item = _element(channel, "item")
    _element(item, "guid", entry.guid, isPermaLink=_flag(entry.guid_is_permalink))
    _element(item, "title", entry.title)
    _element(item, "description", entry.description)
    _element(item, "link", entry.link)
    _element(item, "pubDate", entry.pub_date)
    _element(item, "content:encoded", entry.content)
    _element(item, "itunes:author", entry.author)
    _element(item, "itunes:subtitle", entry.description)
    _element(item, "itunes:summary", entry.description)
    _element(item, "itunes:explicit", _flag(entry.is_explicit))
    _element(item, "itunes:duration", entry.duration)
    if entry.image_url is not None:
        _element(item, "itunes:image", href=entry.image_url)
    if entry.episode_number is not None:
        _element(item, "itunes:episode", str(entry.episode_number))
    if entry.season_number is not None:
        _element(item, "itunes:season", str(entry.season_number))
    for transcript in entry.transcripts:
        attributes = {"url": str(transcript.url), "type": transcript.mime_type.value}
        if transcript.language:
            attributes["language"] = transcript.language
        if transcript.rel:
            attributes["rel"] = transcript.rel
        _element(item, "podcast:transcript", **attributes)

    enclosure = entry.enclosure
    length = str(enclosure.length)
    _element(item, "enclosure", url=enclosure.url, length=length, type=enclosure.type)
    media = _element(
        item,
        "media:content",
        url=enclosure.url,
        length=length,
        type=enclosure.type,
        isDefault="true",
        medium="audio",
    )
    _element(media, "media:title", enclosure.title, type="plain")


def assemble_feed(
    config: PodcastFeedConfiguration,
    site: Site,
    entries: Sequence[PodcastEntry],
    date: datetime,
    section_path: str = "",
    formatted_date: str | None = None,
) -> ET.Element:
    """Build the element tree of a podcast feed.

    Args:
        config: Feed configuration
        site: Site providing the name, language, URL and time zone
        entries: Rendered entries, already in feed order
        date: Generation timestamp used for lastBuildDate and pubDate
        section_path: Path of the section the feed links to by default
        formatted_date: Pre-formatted timestamp, used instead of formatting
            ``date`` when given

    Returns:
        The root ``rss`` element
    """
    root = ET.Element("rss", {"version": "2.0"})
    channel = _element(root, "channel")

    if config.new_feed_url is not None:
        _element(channel, "itunes:new-feed-url", str(config.new_feed_url))

    _element(channel, "title", config.title or site.name)
    _element(channel, "description", config.description)
    link = str(config.link_url) if config.link_url else site.url_for(section_path)
    _element(channel, "link", link)
    _element(channel, "language", site.language)

    date_string = formatted_date or format_rfc822(date, site.time_zone)
    _element(channel, "lastBuildDate", date_string)
    _element(channel, "pubDate", date_string)

    _element(channel, "ttl", str(config.ttl_interval))
    _element(
        channel,
        "atom:link",
        href=site.url_for(config.target_path),
        rel="self",
        type="application/rss+xml",
    )
    if config.web_sub_hub_url is not None:
        _element(channel, "atom:link", href=str(config.web_sub_hub_url), rel="hub")

    _element(channel, "copyright", config.copyright_text)
    _element(channel, "itunes:author", config.author.name)
    _element(channel, "itunes:subtitle", config.subtitle)
    _element(channel, "itunes:summary", config.description)
    _element(channel, "itunes:explicit", _flag(config.is_explicit))

    owner = _element(channel, "itunes:owner")
    _element(owner, "itunes:name", config.author.name)
    _element(owner, "itunes:email", config.author.email_address)

    category = _element(channel, "itunes:category", text=config.category)
    if config.subcategory is not None:
        _element(category, "itunes:category", text=config.subcategory)

    _element(channel, "itunes:type", config.type.value)
    _element(channel, "itunes:image", href=str(config.image_url))

    for entry in entries:
        _append_entry(channel, entry)

    return root


def render_feed(root: ET.Element, indentation: Indentation | None = None) -> str:
    """Serialize a feed element tree to text.

    Without an indentation the document is written on a single line.
    """
    if indentation is not None:
        root = copy.deepcopy(root)
        ET.indent(root, space=indentation.unit)
        separator = "\n"
    else:
        separator = ""
    return XML_DECLARATION + separator + ET.tostring(root, encoding="unicode")
