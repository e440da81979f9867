"""RawHit, ContentDraft and ContentItem dataclasses."""

from dataclasses import asdict, dataclass, field
from datetime import date


def _first_text(item: dict, *keys) -> str:
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


@dataclass
class RawHit:
    """One result as returned by the search provider."""
    url: str = ""
    title: str = ""
    description: str = ""
    source: str = ""  # provider's own classification, e.g. "Google Suggestions"

    @classmethod
    def from_payload(cls, item: dict) -> "RawHit":
        """Build a hit from one provider item; non-string values count as missing."""
        return cls(
            url=_first_text(item, "url", "link"),
            title=_first_text(item, "title"),
            description=_first_text(item, "description", "snippet"),
            source=_first_text(item, "source"),
        )


@dataclass
class ContentDraft:
    """A filtered, normalized candidate that has not been scored or stored yet."""
    topic: str
    url: str
    title: str
    summary: str
    source_domain: str
    publication_date: date
    tags: list[str] = field(default_factory=list)
    age_range: str = "all"
    query: str = ""


@dataclass
class ContentItem:
    """A curated article as held in the content store."""
    topic: str
    url: str
    title: str
    summary: str
    source_domain: str
    publication_date: date
    quality_score: float
    refresh_cycle: int = 1
    is_active: bool = True
    tags: list[str] = field(default_factory=list)
    age_range: str = "all"

    @classmethod
    def from_draft(cls, draft: ContentDraft, quality_score: float) -> "ContentItem":
        return cls(
            topic=draft.topic,
            url=draft.url,
            title=draft.title,
            summary=draft.summary,
            source_domain=draft.source_domain,
            publication_date=draft.publication_date,
            quality_score=quality_score,
            tags=list(draft.tags),
            age_range=draft.age_range,
        )

    def to_row(self) -> dict:
        """Column mapping used by the store backends."""
        row = asdict(self)
        row["content_summary"] = row.pop("summary")
        row["publication_date"] = self.publication_date.isoformat()
        return row

    @classmethod
    def from_row(cls, row: dict) -> "ContentItem":
        pub = row["publication_date"]
        if isinstance(pub, str):
            pub = date.fromisoformat(pub[:10])
        return cls(
            topic=row["topic"],
            url=row["url"],
            title=row.get("title") or "",
            summary=row.get("content_summary") or "",
            source_domain=row.get("source_domain") or "",
            publication_date=pub,
            quality_score=float(row["quality_score"]),
            refresh_cycle=int(row.get("refresh_cycle") or 1),
            is_active=bool(row.get("is_active", True)),
            tags=list(row.get("tags") or []),
            age_range=row.get("age_range") or "all",
        )


def rank_key(item: ContentItem):
    """Sort key: quality desc, publication_date desc, url asc."""
    return (-item.quality_score, -item.publication_date.toordinal(), item.url)
