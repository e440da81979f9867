"""Local SQLite content store."""

import json
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path

from ..errors import StoreFailure
from ..models import ContentItem
from .base import ContentStore

SCHEMA = """
CREATE TABLE IF NOT EXISTS topic_content (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    topic            TEXT    NOT NULL,
    age_range        TEXT    NOT NULL DEFAULT 'all',
    title            TEXT    NOT NULL,
    url              TEXT    NOT NULL UNIQUE,
    content_summary  TEXT    NOT NULL DEFAULT '',
    source_domain    TEXT    NOT NULL,
    publication_date TEXT    NOT NULL,
    quality_score    REAL    NOT NULL CHECK (quality_score >= 0 AND quality_score <= 1),
    refresh_cycle    INTEGER NOT NULL DEFAULT 1,
    is_active        INTEGER NOT NULL DEFAULT 1,
    tags             TEXT    NOT NULL DEFAULT '[]',
    scraped_at       TEXT    NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_topic_content_rank
    ON topic_content (topic, is_active, quality_score DESC, publication_date DESC);
"""

COLUMNS = (
    "topic", "age_range", "title", "url", "content_summary", "source_domain",
    "publication_date", "quality_score", "refresh_cycle", "is_active", "tags",
)

INSERT_SQL = (
    f"INSERT INTO topic_content ({', '.join(COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in COLUMNS)})"
)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteContentStore(ContentStore):
    """One connection per operation; each batch insert is one transaction.

    WAL journaling lets readers keep reading the last committed snapshot
    while an ingestion batch is being written.
    """

    name = "sqlite"

    def __init__(self, path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.executescript(SCHEMA)

    @contextmanager
    def _connect(self):
        try:
            conn = sqlite3.connect(str(self.path), timeout=30)
        except sqlite3.Error as e:
            raise StoreFailure(f"cannot open content store at {self.path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            raise StoreFailure(f"sqlite: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _to_params(item: ContentItem) -> tuple:
        row = item.to_row()
        row["is_active"] = 1 if item.is_active else 0
        row["tags"] = json.dumps(item.tags, ensure_ascii=False)
        return tuple(row[c] for c in COLUMNS)

    @staticmethod
    def _to_item(row: sqlite3.Row) -> ContentItem:
        data = dict(row)
        data["tags"] = json.loads(data.get("tags") or "[]")
        return ContentItem.from_row(data)

    def existing_urls(self) -> set[str]:
        with self._connect() as conn:
            return {r["url"] for r in conn.execute("SELECT url FROM topic_content")}

    def insert_many(self, items: list[ContentItem]) -> int:
        if not items:
            return 0
        params = [self._to_params(item) for item in items]
        with self._connect() as conn:
            with conn:
                conn.executemany(INSERT_SQL, params)
        return len(params)

    def select(self, topic=None, min_quality=0.0, limit=12, source_domains=None,
               exclude_domains=None, since: date | None = None, text=None) -> list[ContentItem]:
        clauses = ["is_active = 1", "quality_score >= ?"]
        params: list = [min_quality]

        if topic is not None:
            clauses.append("topic = ?")
            params.append(topic)
        if source_domains:
            clauses.append(f"source_domain IN ({', '.join('?' for _ in source_domains)})")
            params.extend(source_domains)
        if exclude_domains:
            clauses.append(f"source_domain NOT IN ({', '.join('?' for _ in exclude_domains)})")
            params.extend(exclude_domains)
        if since is not None:
            clauses.append("publication_date >= ?")
            params.append(since.isoformat())
        if text:
            pattern = f"%{_escape_like(text)}%"
            clauses.append("(title LIKE ? ESCAPE '\\' OR content_summary LIKE ? ESCAPE '\\')")
            params.extend([pattern, pattern])

        sql = (
            "SELECT * FROM topic_content WHERE " + " AND ".join(clauses)
            + " ORDER BY quality_score DESC, publication_date DESC, url ASC LIMIT ?"
        )
        params.append(limit)

        with self._connect() as conn:
            return [self._to_item(r) for r in conn.execute(sql, params)]

    def active_items(self) -> list[ContentItem]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM topic_content WHERE is_active = 1")
            return [self._to_item(r) for r in rows]

    def set_active(self, url: str, active: bool) -> bool:
        with self._connect() as conn:
            with conn:
                cur = conn.execute(
                    "UPDATE topic_content SET is_active = ? WHERE url = ?",
                    (1 if active else 0, url),
                )
            return cur.rowcount > 0

    def count_url(self, url: str) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS n FROM topic_content WHERE url = ?", (url,)).fetchone()
            return row["n"]
