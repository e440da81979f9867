"""Content Store Writer — the only code path that adds rows to the store."""

from .errors import StoreFailure
from .log import get_logger
from .models import ContentItem
from .store.base import ContentStore


class ContentStoreWriter:
    """Bulk-inserts one topic's items at a time, all or nothing.

    Never updates or deletes. Callers only hand it URLs that are absent from
    the store, which is what makes re-running the pipeline safe.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    def insert_batch(self, items: list[ContentItem]) -> int:
        """Insert `items`; return the inserted count or raise StoreFailure."""
        if not items:
            return 0

        urls = [item.url for item in items]
        if len(set(urls)) != len(urls):
            raise StoreFailure("batch contains duplicate URLs")

        logger = get_logger()
        logger.debug("Writing %d items to %s store", len(items), self.store.name)
        try:
            inserted = self.store.insert_many(items)
        except StoreFailure as e:
            logger.error("Batch of %d items rejected: %s", len(items), e)
            raise
        return inserted
