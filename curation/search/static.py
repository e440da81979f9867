"""Static provider — canned hits from a JSON file or dict, for offline runs."""

import json
from pathlib import Path

from ..errors import SearchFailure
from ..models import RawHit
from .base import SearchOptions, SearchProvider


class StaticSearchProvider(SearchProvider):
    """Serves pre-recorded hits keyed by query string.

    The mapping value is either a list of hit dicts (same shape as the
    provider's `data` array) or an error string, which is raised as a
    SearchFailure for that query. Unknown queries return no hits.
    """

    name = "static"

    def __init__(self, responses: dict = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    @classmethod
    def from_file(cls, path: Path) -> "StaticSearchProvider":
        return cls(json.loads(Path(path).read_text()))

    def search(self, query: str, options: SearchOptions | None = None) -> list[RawHit]:
        options = options or SearchOptions()
        self.calls.append(query)
        entry = self.responses.get(query, [])
        if isinstance(entry, str):
            raise SearchFailure(query, entry)
        items = [item for item in entry if isinstance(item, dict)]
        return [RawHit.from_payload(item) for item in items[:options.result_limit]]
