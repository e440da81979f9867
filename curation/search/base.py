"""SearchOptions dataclass + SearchProvider ABC."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import RawHit


@dataclass
class SearchOptions:
    """Per-call knobs passed through to the provider."""
    result_limit: int = 10
    region: str = "US"
    language: str = "en"


class SearchProvider(ABC):
    """Abstract base class for search providers.

    Implementations issue exactly one query per call, hold no state between
    calls, and raise SearchFailure instead of returning partial garbage.
    """

    name: str = "unknown"

    @abstractmethod
    def search(self, query: str, options: SearchOptions | None = None) -> list[RawHit]:
        """Run one query and return the provider's hits in relevance order."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if this provider is configured and available."""
        return True
