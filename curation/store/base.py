"""ContentStore ABC — the only way any component touches stored content."""

from abc import ABC, abstractmethod
from datetime import date

from ..models import ContentItem


class ContentStore(ABC):
    """Tabular store of ContentItems with a unique URL key.

    Backends raise StoreFailure for every backend error, whether on the
    write path or the read path.
    """

    name: str = "unknown"

    @abstractmethod
    def existing_urls(self) -> set[str]:
        """Every stored URL, regardless of topic or active flag."""
        ...

    @abstractmethod
    def insert_many(self, items: list[ContentItem]) -> int:
        """Insert all items in one atomic batch; return how many were written."""
        ...

    @abstractmethod
    def select(
        self,
        topic: str | None = None,
        min_quality: float = 0.0,
        limit: int = 12,
        source_domains: list[str] | None = None,
        exclude_domains: list[str] | None = None,
        since: date | None = None,
        text: str | None = None,
    ) -> list[ContentItem]:
        """Active items matching every given predicate.

        Ordered by quality_score desc, publication_date desc, url asc and
        capped at `limit`.
        """
        ...

    @abstractmethod
    def active_items(self) -> list[ContentItem]:
        """Every active item, unordered."""
        ...

    @abstractmethod
    def count_url(self, url: str) -> int:
        """Rows stored under `url`, active or not (0 or 1 while the unique key holds)."""
        ...

    @abstractmethod
    def set_active(self, url: str, active: bool) -> bool:
        """Flip the soft-delete flag; False if no row has that URL."""
        ...
