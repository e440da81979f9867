"""Topic-population job — search, normalize, dedupe, score, store."""

import concurrent.futures
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from .config import MIN_QUERY_INTERVAL, PER_QUERY_LIMIT, get_topic_targets
from .dedup import UrlRegistry, dedupe
from .errors import ConfigError, SearchFailure, StoreFailure
from .log import get_logger, log, set_parallel
from .models import ContentDraft
from .normalize import normalize
from .ratelimit import RateLimiter
from .scoring import QualityScorer
from .search.base import SearchOptions, SearchProvider
from .state import RunState
from .store.base import ContentStore
from .writer import ContentStoreWriter


@dataclass
class TopicTarget:
    """One topic's queries plus the domains trusted for it."""
    topic: str
    queries: list[str] = field(default_factory=list)
    trusted_sources: list[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, topic: str, targets: dict | None = None, queries=None) -> "TopicTarget":
        targets = targets if targets is not None else get_topic_targets()
        if topic not in targets:
            raise ConfigError(f"Unknown topic: {topic!r}. Known: {', '.join(sorted(targets))}")
        entry = targets[topic]
        return cls(
            topic=topic,
            queries=list(queries or entry["queries"]),
            trusted_sources=list(entry["trusted_sources"]),
        )


class IngestionJob:
    """Context for one populate run.

    Holds the URL registry shared by every topic in the run, so the
    cross-run check (stored URLs) and the intra-run check (URLs claimed by
    earlier queries or topics) are the same lookup.
    """

    def __init__(
        self,
        provider: SearchProvider,
        store: ContentStore,
        limiter: RateLimiter | None = None,
        options: SearchOptions | None = None,
        per_query_limit: int = PER_QUERY_LIMIT,
        scorer: QualityScorer | None = None,
        today: date | None = None,
        run_id: str | None = None,
    ):
        self.provider = provider
        self.store = store
        self.writer = ContentStoreWriter(store)
        self.limiter = limiter or RateLimiter(MIN_QUERY_INTERVAL)
        self.options = options or SearchOptions()
        self.per_query_limit = per_query_limit
        self.scorer = scorer or QualityScorer()
        self.today = today
        self.run_id = run_id or str(int(time.time()))
        self.existing_urls: UrlRegistry | None = None

    def load_existing(self) -> UrlRegistry:
        """Load every stored URL once, before the first query of the run."""
        if self.existing_urls is None:
            urls = self.store.existing_urls()
            get_logger().debug("Loaded %d stored URLs from %s", len(urls), self.store.name)
            self.existing_urls = UrlRegistry(urls)
        return self.existing_urls

    def collect(self, target: TopicTarget, failed_queries: list | None = None,
                rejections: Counter | None = None) -> list[ContentDraft]:
        """Run every query for `target` and return its unique, unstored drafts.

        A query that raises SearchFailure contributes nothing; the remaining
        queries still run.
        """
        logger = get_logger()
        registry = self.load_existing()
        collected: dict[str, ContentDraft] = {}

        for query in target.queries:
            self.limiter.acquire()
            try:
                hits = self.provider.search(query, self.options)
            except SearchFailure as e:
                logger.warning("%s: %s - skipped, 0 drafts", target.topic, e)
                if failed_queries is not None:
                    failed_queries.append(query)
                continue

            drafts = normalize(hits, target.topic, query, self.per_query_limit, self.today, rejections)
            fresh = dedupe(drafts, registry, collected)
            log(f'{target.topic}: "{query}" -> {len(hits)} hits, {len(drafts)} kept, {len(fresh)} new')

        return list(collected.values())

    def run_topic(self, target: TopicTarget, state: RunState) -> int:
        """Populate one topic and record the outcome in `state`."""
        logger = get_logger()
        failed_queries: list[str] = []
        rejections: Counter = Counter()

        drafts = self.collect(target, failed_queries, rejections)
        if rejections:
            logger.debug("%s: rejected %s", target.topic, dict(rejections))

        items = [self.scorer.stamp(d, target.trusted_sources) for d in drafts]
        try:
            inserted = self.writer.insert_batch(items)
        except StoreFailure as e:
            # The URLs were never stored; let a later topic or run claim them.
            self.existing_urls.discard_all(d.url for d in drafts)
            state.fail_topic(target.topic, str(e), failed_queries)
            log(f"{target.topic}: store failed - {e}")
            return 0

        state.complete_topic(target.topic, inserted, failed_queries, rejections)
        log(f"{target.topic}: inserted {inserted} items")
        return inserted

    def _run_guarded(self, target: TopicTarget, state: RunState):
        try:
            self.run_topic(target, state)
        except Exception as e:
            get_logger().exception("%s: unexpected failure", target.topic)
            state.fail_topic(target.topic, f"{type(e).__name__}: {e}")

    def _run_in_worker(self, target: TopicTarget, state: RunState):
        threading.current_thread().name = target.topic
        self._run_guarded(target, state)

    def run(self, targets: list[TopicTarget], parallel: bool = False, max_workers: int = 3) -> RunState:
        """Populate every target; one topic's failure never stops the others."""
        state = RunState(self.run_id, [t.topic for t in targets])

        try:
            self.load_existing()
        except StoreFailure as e:
            for target in targets:
                state.fail_topic(target.topic, f"could not load stored URLs: {e}")
            log(f"Aborting run {self.run_id}: {e}")
            return state

        if parallel and len(targets) > 1:
            set_parallel(True)
            try:
                with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
                    futures = [pool.submit(self._run_in_worker, t, state) for t in targets]
                    concurrent.futures.wait(futures)
            finally:
                set_parallel(False)
        else:
            for target in targets:
                self._run_guarded(target, state)

        return state
