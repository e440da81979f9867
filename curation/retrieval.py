"""Retrieval/Ranking Service — the read-only view consumers get of the store."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta

from .config import (
    DEFAULT_FETCH_LIMIT,
    DEFAULT_MIN_QUALITY,
    DEFAULT_SEARCH_LIMIT,
    get_topic_targets,
)
from .errors import RetrievalFailure, StoreFailure
from .log import get_logger
from .models import ContentItem, rank_key
from .store.base import ContentStore


@dataclass
class ContentFilters:
    """Optional narrowing on top of the topic/quality predicates."""
    source_domains: list[str] = field(default_factory=list)
    exclude_domains: list[str] = field(default_factory=list)
    max_age_days: int | None = None  # days since publication_date


@dataclass
class ContentStats:
    total: int = 0
    by_topic: dict = field(default_factory=dict)
    by_source: dict = field(default_factory=dict)
    quality: dict = field(default_factory=lambda: {"high": 0, "medium": 0, "low": 0})
    average_quality: float = 0.0


class RetrievalService:
    """Ranked, quality-filtered, size-capped reads.

    Stateless apart from its defaults; every call is a single store read, so
    any number of threads may use one instance while ingestion is writing.
    """

    def __init__(self, store: ContentStore, topics=None,
                 min_quality: float = DEFAULT_MIN_QUALITY, limit: int = DEFAULT_FETCH_LIMIT,
                 today=None):
        self.store = store
        self.topics = set(topics) if topics is not None else set(get_topic_targets())
        self.min_quality = min_quality
        self.limit = limit
        self._today = today or date.today

    def _check(self, min_quality: float, limit: int):
        if not isinstance(limit, int) or limit <= 0:
            raise RetrievalFailure(f"limit must be a positive integer, got {limit!r}")
        if not 0.0 <= min_quality <= 1.0:
            raise RetrievalFailure(f"min_quality must be within [0, 1], got {min_quality!r}")

    def _select(self, **kwargs) -> list[ContentItem]:
        try:
            items = self.store.select(**kwargs)
        except StoreFailure as e:
            get_logger().error("Content read failed: %s", e)
            raise RetrievalFailure("content store is unavailable") from e
        return sorted(items, key=rank_key)

    def fetch(self, topic: str, min_quality: float | None = None, limit: int | None = None,
              filters: ContentFilters | None = None) -> list[ContentItem]:
        """Top `limit` active items for `topic` scoring at least `min_quality`."""
        min_quality = self.min_quality if min_quality is None else min_quality
        limit = self.limit if limit is None else limit
        self._check(min_quality, limit)
        if topic not in self.topics:
            raise RetrievalFailure(f"unknown topic: {topic!r}")

        filters = filters or ContentFilters()
        since = None
        if filters.max_age_days is not None:
            since = self._today() - timedelta(days=filters.max_age_days)

        items = self._select(
            topic=topic,
            min_quality=min_quality,
            limit=limit,
            source_domains=filters.source_domains or None,
            exclude_domains=filters.exclude_domains or None,
            since=since,
        )
        return items[:limit]

    def fetch_many(self, topics: list[str], min_quality: float | None = None, limit: int | None = None,
                   filters: ContentFilters | None = None) -> list[ContentItem]:
        """Fetch each topic on its own, then merge into one ranked list.

        Each topic contributes at most `limit` items; the merged list is not
        cut again.
        """
        combined = []
        for topic in dict.fromkeys(topics):
            combined.extend(self.fetch(topic, min_quality, limit, filters))
        return sorted(combined, key=rank_key)

    def fetch_or_empty(self, topic: str, min_quality: float | None = None, limit: int | None = None,
                       filters: ContentFilters | None = None) -> list[ContentItem]:
        """fetch() for display code: a failure degrades to "no content available"."""
        try:
            return self.fetch(topic, min_quality, limit, filters)
        except RetrievalFailure as e:
            get_logger().warning("No content for %s: %s", topic, e)
            return []

    def search(self, text: str, min_quality: float | None = None,
               limit: int = DEFAULT_SEARCH_LIMIT) -> list[ContentItem]:
        """Case-insensitive match on title or summary across every topic."""
        min_quality = self.min_quality if min_quality is None else min_quality
        self._check(min_quality, limit)
        text = text.strip()
        if not text:
            raise RetrievalFailure("search text is empty")
        return self._select(min_quality=min_quality, limit=limit, text=text)[:limit]

    def stats(self) -> ContentStats:
        """Counts and quality distribution over every active item."""
        try:
            items = self.store.active_items()
        except StoreFailure as e:
            raise RetrievalFailure("content store is unavailable") from e

        stats = ContentStats(total=len(items))
        if not items:
            return stats

        stats.by_topic = dict(Counter(i.topic for i in items).most_common())
        stats.by_source = dict(Counter(i.source_domain for i in items).most_common())
        for item in items:
            if item.quality_score >= 0.7:
                stats.quality["high"] += 1
            elif item.quality_score >= 0.4:
                stats.quality["medium"] += 1
            else:
                stats.quality["low"] += 1
        stats.average_quality = sum(i.quality_score for i in items) / len(items)
        return stats
