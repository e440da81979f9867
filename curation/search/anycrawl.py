"""AnyCrawl search API provider."""

import requests

from ..config import ANYCRAWL_BASE_URL, SEARCH_ENGINE, SEARCH_TIMEOUT, get_anycrawl_key
from ..errors import SearchFailure
from ..log import get_logger
from ..models import RawHit
from ..retry import with_retry
from .base import SearchOptions, SearchProvider

TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


@with_retry(max_retries=1, base_delay=2.0, retry_on=TRANSIENT_ERRORS)
def _post_search(session: requests.Session, url: str, payload: dict, timeout: float) -> requests.Response:
    return session.post(url, json=payload, timeout=timeout)


class AnyCrawlProvider(SearchProvider):
    name = "anycrawl"

    def __init__(self, config: dict = None, api_key: str = None, session: requests.Session = None):
        config = config or {}
        self.api_key = api_key if api_key is not None else get_anycrawl_key()
        self.base_url = config.get("base_url", ANYCRAWL_BASE_URL).rstrip("/")
        self.engine = config.get("engine", SEARCH_ENGINE)
        self.timeout = float(config.get("timeout", SEARCH_TIMEOUT))
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "User-Agent": "topic-curation/1.0",
        })

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def search(self, query: str, options: SearchOptions | None = None) -> list[RawHit]:
        options = options or SearchOptions()
        payload = {
            "query": query,
            "engine": self.engine,
            "limit": options.result_limit,
            "country": options.region,
            "language": options.language,
        }

        try:
            r = _post_search(self.session, f"{self.base_url}/search", payload, self.timeout)
            r.raise_for_status()
            body = r.json()
        except requests.RequestException as e:
            raise SearchFailure(query, e) from e
        except ValueError as e:
            raise SearchFailure(query, f"invalid JSON: {e}") from e

        if not isinstance(body, dict) or not body.get("success"):
            raise SearchFailure(query, "provider reported success=false")

        data = body.get("data")
        if not isinstance(data, list):
            raise SearchFailure(query, f"unexpected payload shape: {type(data).__name__}")

        hits = [RawHit.from_payload(item) for item in data if isinstance(item, dict)]
        get_logger().debug('anycrawl: "%s" -> %d hits', query, len(hits))
        return hits
