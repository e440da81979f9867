"""Content store backends."""

from pathlib import Path

from ..config import DEFAULT_DB_PATH, get_section, get_supabase_credentials
from ..errors import ConfigError
from .base import ContentStore
from .sqlite import SQLiteContentStore
from .supabase import SupabaseContentStore

__all__ = ["ContentStore", "SQLiteContentStore", "SupabaseContentStore", "get_store"]


def get_store(config: dict | None = None) -> ContentStore:
    """Build the backend named by config.json["store"]["backend"] (default sqlite)."""
    if config is None:
        config = get_section("store")
    backend = config.get("backend", "sqlite")

    if backend == "sqlite":
        return SQLiteContentStore(Path(config.get("path", DEFAULT_DB_PATH)).expanduser())
    if backend == "supabase":
        url, key = get_supabase_credentials()
        return SupabaseContentStore(url, key, table=config.get("table", "topic_content"))
    raise ConfigError(f"Unknown store backend: {backend!r} (expected 'sqlite' or 'supabase')")
