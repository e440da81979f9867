"""Typed failures raised across the curation pipeline."""


class CurationError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigError(CurationError):
    """Missing key or unusable configuration, raised before any work starts."""


class SearchFailure(CurationError):
    """One provider query failed (transport error, timeout, non-success, bad payload).

    Recovered by the ingestion job: the query is skipped, the batch continues.
    """

    def __init__(self, query: str, cause):
        self.query = query
        self.cause = cause
        super().__init__(f'search failed for "{query}": {cause}')


class StoreFailure(CurationError):
    """The content store rejected a batch or could not be reached."""


class RetrievalFailure(CurationError):
    """A read against the store failed or the request was malformed.

    The message is safe to show a consumer; backend detail stays on __cause__.
    """
