"""Shared test fixtures."""

import os
import tempfile

# Keep logs, run records and the default database out of the real home dir.
os.environ.setdefault("CURATION_HOME", tempfile.mkdtemp(prefix="curation-test-"))

from datetime import date  # noqa: E402

import pytest  # noqa: E402

from curation.models import ContentItem  # noqa: E402
from curation.ratelimit import RateLimiter  # noqa: E402
from curation.store.sqlite import SQLiteContentStore  # noqa: E402

LONG_DESC = (
    "A thorough, evidence-based overview written for parents that explains "
    "what to expect and how to respond at each stage."
)


@pytest.fixture
def make_hit():
    """Factory for provider-shaped hit dicts."""
    def _hit(url, title="Article", description=LONG_DESC, source="Google Search"):
        return {"url": url, "title": title, "description": description, "source": source}
    return _hit


@pytest.fixture
def store(tmp_path):
    return SQLiteContentStore(tmp_path / "content.db")


@pytest.fixture
def no_wait_limiter():
    return RateLimiter(interval=0)


@pytest.fixture
def today():
    return date(2026, 10, 18)


@pytest.fixture
def make_item():
    """Factory for stored items with sensible defaults."""
    def _make(url, topic="health_safety", quality=0.85, pub=date(2026, 10, 1), **kwargs):
        return ContentItem(
            topic=topic,
            url=url,
            title=kwargs.pop("title", f"Title for {url}"),
            summary=kwargs.pop("summary", "Summary..."),
            source_domain=kwargs.pop("source_domain", "example.org"),
            publication_date=pub,
            quality_score=quality,
            **kwargs,
        )
    return _make
