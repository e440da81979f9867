"""Topic content curation: ingest articles per topic, serve them ranked by trust and recency."""

__version__ = "1.0.0"
