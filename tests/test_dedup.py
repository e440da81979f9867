"""Tests for curation/dedup.py — cross-run and intra-run URL deduplication."""

import threading
from datetime import date

from curation.dedup import UrlRegistry, dedupe
from curation.models import ContentDraft


def draft(url, query="q", title="T"):
    return ContentDraft(
        topic="sleep_patterns", url=url, title=title, summary="S...",
        source_domain="example.org", publication_date=date(2026, 10, 18), query=query,
    )


class TestUrlRegistry:
    def test_claim_filters_and_registers(self):
        registry = UrlRegistry({"https://a.org/1"})
        fresh = registry.claim([draft("https://a.org/1"), draft("https://a.org/2")])
        assert [d.url for d in fresh] == ["https://a.org/2"]
        assert "https://a.org/2" in registry
        assert len(registry) == 2

    def test_discard_all(self):
        registry = UrlRegistry({"https://a.org/1", "https://a.org/2"})
        registry.discard_all(["https://a.org/1"])
        assert "https://a.org/1" not in registry
        assert "https://a.org/2" in registry

    def test_concurrent_claims_never_share_a_url(self):
        registry = UrlRegistry()
        urls = [f"https://a.org/{i}" for i in range(200)]
        won = []
        lock = threading.Lock()

        def worker():
            fresh = registry.claim([draft(u) for u in urls])
            with lock:
                won.extend(d.url for d in fresh)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(won) == sorted(urls)


class TestDedupe:
    def test_cross_run_urls_discarded(self):
        registry = UrlRegistry({"https://aap.org/sleep-guide"})
        collected = {}
        fresh = dedupe([draft("https://aap.org/sleep-guide"), draft("https://cdc.gov/naps")], registry, collected)
        assert [d.url for d in fresh] == ["https://cdc.gov/naps"]
        assert list(collected) == ["https://cdc.gov/naps"]

    def test_last_write_wins_within_a_batch(self):
        registry = UrlRegistry()
        collected = {}
        dedupe([draft("https://a.org/1", title="first"), draft("https://a.org/1", title="second")],
               registry, collected)
        assert len(collected) == 1
        assert collected["https://a.org/1"].title == "second"

    def test_later_query_sees_earlier_urls_as_taken(self):
        registry = UrlRegistry()
        collected = {}
        dedupe([draft("https://a.org/1", query="q1"), draft("https://a.org/2", query="q1")], registry, collected)
        fresh = dedupe([draft("https://a.org/2", query="q2"), draft("https://a.org/3", query="q2")],
                       registry, collected)

        assert [d.url for d in fresh] == ["https://a.org/3"]
        assert sorted(collected) == ["https://a.org/1", "https://a.org/2", "https://a.org/3"]
        assert collected["https://a.org/2"].query == "q1"

    def test_output_unique_by_url(self):
        registry = UrlRegistry()
        collected = {}
        for batch in (["1", "2", "2"], ["2", "3"], ["3", "4", "1"]):
            dedupe([draft(f"https://a.org/{n}") for n in batch], registry, collected)
        urls = [d.url for d in collected.values()]
        assert len(urls) == len(set(urls)) == 4
