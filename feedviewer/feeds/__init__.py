"""Feed and item data model: TSV parsing, recency, and per-feed loading."""

from .model import (
    FIELD_AUTHOR,
    FIELD_CONTENT,
    FIELD_CONTENT_TYPE,
    FIELD_COUNT,
    FIELD_ENCLOSURE,
    FIELD_ID,
    FIELD_LINK,
    FIELD_TIMESTAMP,
    FIELD_TITLE,
    Feed,
    Item,
    feed_label_width,
    format_feed_label,
    format_item_text,
    parse_timestamp,
    split_fields,
)
from .seen import SeenUrls, read_urls
from .store import ONE_DAY_SECONDS, FeedStore, feeds_from_paths

__all__ = [
    "FIELD_AUTHOR",
    "FIELD_CONTENT",
    "FIELD_CONTENT_TYPE",
    "FIELD_COUNT",
    "FIELD_ENCLOSURE",
    "FIELD_ID",
    "FIELD_LINK",
    "FIELD_TIMESTAMP",
    "FIELD_TITLE",
    "ONE_DAY_SECONDS",
    "Feed",
    "FeedStore",
    "Item",
    "SeenUrls",
    "feed_label_width",
    "feeds_from_paths",
    "format_feed_label",
    "format_item_text",
    "parse_timestamp",
    "read_urls",
    "split_fields",
]
