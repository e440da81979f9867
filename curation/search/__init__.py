"""Search provider adapters."""

from .anycrawl import AnyCrawlProvider
from .base import SearchOptions, SearchProvider
from .static import StaticSearchProvider

__all__ = ["AnyCrawlProvider", "SearchOptions", "SearchProvider", "StaticSearchProvider"]
