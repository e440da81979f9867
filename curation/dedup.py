"""URL deduplication — against the stored set and within the current run."""

import threading

from .models import ContentDraft


class UrlRegistry:
    """The set of URLs that are already taken, stored or claimed earlier in this run.

    Owned by one ingestion job and shared by every topic it processes. All
    access goes through a lock so topics running in parallel threads still
    see each other's claims.
    """

    def __init__(self, urls=()):
        self._urls = set(urls)
        self._lock = threading.Lock()

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def discard_all(self, urls):
        with self._lock:
            self._urls.difference_update(urls)

    def claim(self, drafts: list[ContentDraft]) -> list[ContentDraft]:
        """Drop drafts whose URL is taken, then mark the survivors' URLs as taken.

        Check and union happen under one lock hold, so two threads can never
        both claim the same URL.
        """
        with self._lock:
            fresh = [d for d in drafts if d.url not in self._urls]
            self._urls.update(d.url for d in fresh)
        return fresh


def dedupe(drafts: list[ContentDraft], existing_urls: UrlRegistry,
           collected: dict[str, ContentDraft] | None = None) -> list[ContentDraft]:
    """Fold one query's drafts into the run's URL-keyed collection.

    Drafts whose URL is already registered are discarded. Among the rest, a
    later draft with the same URL replaces the earlier one in `collected`
    (last write wins). The surviving URLs are then registered so later
    queries treat them as taken. Returns the drafts this call added.
    """
    if collected is None:
        collected = {}

    batch: dict[str, ContentDraft] = {}
    for draft in drafts:
        batch[draft.url] = draft

    fresh = existing_urls.claim(list(batch.values()))
    for draft in fresh:
        collected[draft.url] = draft
    return fresh
