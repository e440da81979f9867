"""Supabase content store over the PostgREST HTTP interface."""

import re

import requests

from ..errors import StoreFailure
from ..models import ContentItem
from .base import ContentStore

PAGE_SIZE = 1000
ORDERING = "quality_score.desc,publication_date.desc,url.asc"


class SupabaseContentStore(ContentStore):
    """Reads and writes the `topic_content` table of a Supabase project.

    A single POST of the whole batch is one statement on the server side,
    so a unique-URL violation rejects the batch as a whole.
    """

    name = "supabase"

    def __init__(self, url: str, key: str, table: str = "topic_content",
                 timeout: float = 30.0, session: requests.Session = None):
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        })

    def _request(self, method: str, params=None, json=None, headers=None) -> requests.Response:
        try:
            r = self.session.request(
                method, self.endpoint, params=params, json=json,
                headers=headers, timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreFailure(f"supabase unreachable: {e}") from e
        if r.status_code >= 400:
            raise StoreFailure(f"supabase {method} rejected ({r.status_code}): {r.text[:300]}")
        return r

    def _paginate(self, params: list) -> list[dict]:
        rows = []
        offset = 0
        while True:
            page = self._request(
                "GET", params=params + [("limit", PAGE_SIZE), ("offset", offset)],
            ).json()
            rows.extend(page)
            if len(page) < PAGE_SIZE:
                return rows
            offset += PAGE_SIZE

    def existing_urls(self) -> set[str]:
        rows = self._paginate([("select", "url"), ("order", "url.asc")])
        return {r["url"] for r in rows}

    def insert_many(self, items: list[ContentItem]) -> int:
        if not items:
            return 0
        self._request(
            "POST",
            json=[item.to_row() for item in items],
            headers={"Prefer": "return=minimal"},
        )
        return len(items)

    def select(self, topic=None, min_quality=0.0, limit=12, source_domains=None,
               exclude_domains=None, since=None, text=None) -> list[ContentItem]:
        params = [
            ("select", "*"),
            ("is_active", "eq.true"),
            ("quality_score", f"gte.{min_quality}"),
        ]
        if topic is not None:
            params.append(("topic", f"eq.{topic}"))
        if source_domains:
            params.append(("source_domain", f"in.({','.join(source_domains)})"))
        if exclude_domains:
            params.append(("source_domain", f"not.in.({','.join(exclude_domains)})"))
        if since is not None:
            params.append(("publication_date", f"gte.{since.isoformat()}"))
        if text:
            # PostgREST filter syntax reserves these characters
            term = re.sub(r"[,()*:]", " ", text).strip()
            if term:
                params.append(("or", f"(title.ilike.*{term}*,content_summary.ilike.*{term}*)"))
        params.append(("order", ORDERING))
        params.append(("limit", limit))

        return [ContentItem.from_row(r) for r in self._request("GET", params=params).json()]

    def active_items(self) -> list[ContentItem]:
        rows = self._paginate([("select", "*"), ("is_active", "eq.true"), ("order", "url.asc")])
        return [ContentItem.from_row(r) for r in rows]

    def set_active(self, url: str, active: bool) -> bool:
        r = self._request(
            "PATCH",
            params=[("url", f"eq.{url}")],
            json={"is_active": active},
            headers={"Prefer": "return=representation"},
        )
        return len(r.json()) > 0

    def count_url(self, url: str) -> int:
        return len(self._request("GET", params=[("select", "url"), ("url", f"eq.{url}")]).json())
