"""CLI entry point — python -m curation."""

import argparse
import sys

from .config import (
    MIN_QUERY_INTERVAL,
    PER_QUERY_LIMIT,
    RUNS_DIR,
    SEARCH_LANGUAGE,
    SEARCH_REGION,
    SEARCH_RESULT_LIMIT,
    get_section,
    get_topic_targets,
    run_setup,
)
from .errors import ConfigError, RetrievalFailure, StoreFailure
from .log import log, set_verbose


def _build_provider(args, search_cfg: dict):
    from .search import AnyCrawlProvider, StaticSearchProvider

    if args.hits_file:
        return StaticSearchProvider.from_file(args.hits_file)
    provider = AnyCrawlProvider(search_cfg)
    if not provider.is_available:
        raise ConfigError(
            "ANYCRAWL_API_KEY is not set.\n"
            "Set it in env, or run: python -m curation setup"
        )
    return provider


def _print_items(items):
    for i, item in enumerate(items, 1):
        print(f"  {i:2d}. [{item.quality_score:.2f}] {item.title}")
        print(f"      {item.source_domain} · {item.publication_date} · {item.url}")


def cmd_populate(args):
    from .job import IngestionJob, TopicTarget
    from .ratelimit import RateLimiter
    from .scoring import QualityScorer
    from .search import SearchOptions
    from .store import get_store

    search_cfg = get_section("search")
    scoring_cfg = get_section("scoring")
    targets_cfg = get_topic_targets()

    topics = args.topic or list(targets_cfg)
    if args.query and len(topics) != 1:
        raise ConfigError("--query overrides need exactly one --topic")
    targets = [TopicTarget.from_config(t, targets_cfg, args.query) for t in topics]

    scorer_kwargs = {k: scoring_cfg[k] for k in ("trusted_score", "baseline_score") if k in scoring_cfg}
    job = IngestionJob(
        provider=_build_provider(args, search_cfg),
        store=get_store(),
        limiter=RateLimiter(float(search_cfg.get("min_interval", MIN_QUERY_INTERVAL))),
        options=SearchOptions(
            result_limit=int(search_cfg.get("result_limit", SEARCH_RESULT_LIMIT)),
            region=search_cfg.get("region", SEARCH_REGION),
            language=search_cfg.get("language", SEARCH_LANGUAGE),
        ),
        per_query_limit=args.per_query or int(search_cfg.get("per_query_limit", PER_QUERY_LIMIT)),
        scorer=QualityScorer(**scorer_kwargs),
    )

    print(f"\n  Populating {len(targets)} topic(s) — run {job.run_id}\n")
    state = job.run(targets, parallel=args.parallel)

    out_path = RUNS_DIR / f"{job.run_id}.json"
    state.save(out_path)
    print(f"\n{state.summary()}")
    print(f"\n  Run record: {out_path}")

    if state.failed_topics:
        sys.exit(1)


def cmd_fetch(args):
    from .retrieval import ContentFilters, RetrievalService
    from .store import get_store

    service = RetrievalService(get_store())
    filters = ContentFilters(
        source_domains=args.domain or [],
        exclude_domains=args.exclude_domain or [],
        max_age_days=args.max_age,
    )
    try:
        items = service.fetch_many(args.topic, args.min_quality, args.limit, filters)
    except RetrievalFailure as e:
        log(f"Fetch failed: {e}")
        items = []

    if not items:
        print("  No content available.")
        return
    print(f"\n  {len(items)} item(s) for {', '.join(args.topic)}:\n")
    _print_items(items)


def cmd_search(args):
    from .retrieval import RetrievalService
    from .store import get_store

    service = RetrievalService(get_store())
    try:
        items = service.search(args.text, args.min_quality, args.limit)
    except RetrievalFailure as e:
        log(f"Search failed: {e}")
        items = []

    if not items:
        print("  No content available.")
        return
    print(f'\n  {len(items)} match(es) for "{args.text}":\n')
    _print_items(items)


def cmd_stats(args):
    from .retrieval import RetrievalService
    from .store import get_store

    try:
        stats = RetrievalService(get_store()).stats()
    except RetrievalFailure as e:
        print(f"  Stats unavailable: {e}")
        sys.exit(1)

    labels = {t: meta["label"] for t, meta in get_topic_targets().items()}
    print(f"\n  Active items: {stats.total}  (average quality {stats.average_quality:.2f})")
    q = stats.quality
    print(f"  Quality: {q['high']} high, {q['medium']} medium, {q['low']} low\n")
    print("  By topic:")
    for topic in labels:
        print(f"    {labels[topic]:<24} {stats.by_topic.get(topic, 0)}")
    print("\n  Top sources:")
    for domain, count in list(stats.by_source.items())[:10]:
        print(f"    {domain:<32} {count}")


def main():
    parser = argparse.ArgumentParser(
        description="Topic content curation — populate and query the content store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("setup", help="Interactive first-run configuration")

    # populate
    p_pop = sub.add_parser("populate", help="Search, filter, score and store content per topic")
    p_pop.add_argument("--topic", action="append", help="Topic id (repeatable, default: all)")
    p_pop.add_argument("--query", action="append", help="Override queries for a single --topic")
    p_pop.add_argument("--per-query", type=int, default=None, help="Max drafts kept per query")
    p_pop.add_argument("--parallel", action="store_true", help="Process topics concurrently")
    p_pop.add_argument("--hits-file", default=None, help="Serve canned hits from a JSON file")

    # fetch
    p_fetch = sub.add_parser("fetch", help="Show the ranked content for one or more topics")
    p_fetch.add_argument("--topic", action="append", required=True)
    p_fetch.add_argument("--min-quality", type=float, default=None)
    p_fetch.add_argument("--limit", type=int, default=None)
    p_fetch.add_argument("--domain", action="append", help="Only these source domains")
    p_fetch.add_argument("--exclude-domain", action="append", help="Skip these source domains")
    p_fetch.add_argument("--max-age", type=int, default=None, help="Max days since publication")

    # search
    p_search = sub.add_parser("search", help="Search titles and summaries across topics")
    p_search.add_argument("--text", required=True)
    p_search.add_argument("--min-quality", type=float, default=None)
    p_search.add_argument("--limit", type=int, default=20)

    sub.add_parser("stats", help="Content counts by topic, source and quality")

    args = parser.parse_args()

    if args.verbose:
        set_verbose(True)

    if not args.cmd:
        parser.print_help()
        return

    commands = {
        "setup": lambda _: run_setup(),
        "populate": cmd_populate,
        "fetch": cmd_fetch,
        "search": cmd_search,
        "stats": cmd_stats,
    }
    try:
        commands[args.cmd](args)
    except (ConfigError, StoreFailure) as e:
        print(f"  Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
