"""Raw hit filtering and normalization into ContentDrafts."""

from collections import Counter
from datetime import date
from urllib.parse import urlparse

from .config import (
    BLOCKED_DOMAINS,
    ELLIPSIS,
    MIN_DESCRIPTION_LENGTH,
    PER_QUERY_LIMIT,
    SUGGESTION_SOURCES,
    SUMMARY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    topic_label,
)
from .models import ContentDraft, RawHit


def source_domain(url: str) -> str:
    """Lower-cased host of `url` with a leading "www." stripped ("" if unparseable)."""
    try:
        host = urlparse(url.strip()).hostname or ""
    except ValueError:
        return ""
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def domain_matches(domain: str, candidates) -> bool:
    """True if `domain` equals, or is a subdomain of, any entry in `candidates`."""
    for entry in candidates:
        entry = entry.lower().strip()
        if entry.startswith("www."):
            entry = entry[4:]
        if entry and (domain == entry or domain.endswith("." + entry)):
            return True
    return False


def rejection_reason(hit: RawHit) -> str | None:
    """Name of the first filter rule `hit` fails, or None if it passes them all."""
    if not hit.url or not hit.description:
        return "missing_field"
    if len(hit.description) <= MIN_DESCRIPTION_LENGTH:
        return "short_description"
    if hit.source in SUGGESTION_SOURCES:
        return "suggestion"
    try:
        scheme = urlparse(hit.url.strip()).scheme
    except ValueError:
        return "bad_url"
    if scheme not in ("http", "https"):
        return "bad_url"
    domain = source_domain(hit.url)
    if not domain:
        return "bad_url"
    if domain_matches(domain, BLOCKED_DOMAINS):
        return "blocked_domain"
    return None


def _summarize(description: str) -> str:
    return description.strip()[:SUMMARY_MAX_LENGTH] + ELLIPSIS


def _tags(topic: str, query: str) -> list[str]:
    tags = [topic_label(topic)]
    words = query.split()
    if words:
        tags.append(words[0])
    return tags


def normalize(
    hits: list[RawHit],
    topic: str,
    query: str,
    per_query_limit: int = PER_QUERY_LIMIT,
    today: date | None = None,
    rejections: Counter | None = None,
) -> list[ContentDraft]:
    """Turn one query's hits into at most `per_query_limit` drafts.

    Hits keep provider order, so the earliest surviving hits win the cap.
    Rejected hits are tallied by reason into `rejections` when given.
    """
    today = today or date.today()
    drafts = []
    for hit in hits:
        reason = rejection_reason(hit)
        if reason:
            if rejections is not None:
                rejections[reason] += 1
            continue
        if len(drafts) >= per_query_limit:
            if rejections is not None:
                rejections["over_cap"] += 1
            continue

        url = hit.url.strip()
        drafts.append(ContentDraft(
            topic=topic,
            url=url,
            title=(hit.title.strip() or "Untitled")[:TITLE_MAX_LENGTH],
            summary=_summarize(hit.description),
            source_domain=source_domain(url),
            publication_date=today,
            tags=_tags(topic, query),
            query=query,
        ))
    return drafts
