"""Key resolution, paths, topic targets, and setup wizard."""

import json
import os
import sys
from pathlib import Path

from .errors import ConfigError

# ─────────────────────────────────────────────────────
# Curation home directory: all data lives here
# ─────────────────────────────────────────────────────
CURATION_HOME = Path(os.environ.get("CURATION_HOME", Path.home() / ".topic-curation"))
LOGS_DIR = CURATION_HOME / "logs"
RUNS_DIR = CURATION_HOME / "runs"
CONFIG_FILE = CURATION_HOME / "config.json"
DEFAULT_DB_PATH = CURATION_HOME / "content.db"

# ─────────────────────────────────────────────────────
# Search provider defaults: override under config.json["search"]
# ─────────────────────────────────────────────────────
ANYCRAWL_BASE_URL = "https://api.anycrawl.dev/v1"
SEARCH_ENGINE = "google"
SEARCH_RESULT_LIMIT = 10
SEARCH_REGION = "US"
SEARCH_LANGUAGE = "en"
SEARCH_TIMEOUT = 30.0
MIN_QUERY_INTERVAL = 1.5
PER_QUERY_LIMIT = 5

# ─────────────────────────────────────────────────────
# Filtering + scoring constants
# ─────────────────────────────────────────────────────
MIN_DESCRIPTION_LENGTH = 50
TITLE_MAX_LENGTH = 200
SUMMARY_MAX_LENGTH = 300
ELLIPSIS = "..."
SUGGESTION_SOURCES = {"Google Suggestions"}

BLOCKED_DOMAINS = {
    "youtube.com", "youtu.be", "facebook.com", "pinterest.com",
    "instagram.com", "tiktok.com", "twitter.com", "x.com", "reddit.com",
}

TRUSTED_SCORE = 0.85
BASELINE_SCORE = 0.65

# ─────────────────────────────────────────────────────
# Retrieval defaults
# ─────────────────────────────────────────────────────
DEFAULT_MIN_QUALITY = 0.4
DEFAULT_FETCH_LIMIT = 12
DEFAULT_SEARCH_LIMIT = 20

# ─────────────────────────────────────────────────────
# Topics: label, description, default queries, trusted sources
# ─────────────────────────────────────────────────────
TOPICS = {
    "feeding_nutrition": {
        "label": "Feeding & Nutrition",
        "description": "Feeding schedules, nutrition, and meal planning",
        "queries": [
            "best advice on baby feeding",
            "expert tips for infant nutrition",
            "comprehensive guide to baby feeding",
            "top recommendations for baby nutrition",
        ],
        "trusted_sources": ["aap.org", "mayoclinic.org", "cdc.gov", "healthychildren.org"],
    },
    "sleep_patterns": {
        "label": "Sleep & Rest",
        "description": "Sleep training, schedules, and bedtime routines",
        "queries": [
            "best advice on baby sleep",
            "expert sleep training guidance",
            "comprehensive baby sleep guide",
            "top tips for infant sleep",
        ],
        "trusted_sources": ["sleepfoundation.org", "aap.org", "healthychildren.org"],
    },
    "cognitive_development": {
        "label": "Learning & Development",
        "description": "Cognitive milestones and mental development",
        "queries": [
            "best advice on baby cognitive development",
            "expert tips for brain development",
            "comprehensive guide to baby learning",
            "top cognitive development strategies",
        ],
        "trusted_sources": ["zerotothree.org", "aap.org", "cdc.gov"],
    },
    "physical_development": {
        "label": "Motor Skills",
        "description": "Physical milestones and motor skill development",
        "queries": [
            "baby physical development milestones",
            "infant motor skills development",
            "tummy time benefits for babies",
        ],
        "trusted_sources": ["aap.org", "cdc.gov", "healthychildren.org", "mayoclinic.org"],
    },
    "social_emotional": {
        "label": "Emotions & Social",
        "description": "Emotional development and social skills",
        "queries": [
            "baby emotional development stages",
            "infant social skills development",
            "bonding with your baby tips",
        ],
        "trusted_sources": ["zerotothree.org", "aap.org", "healthychildren.org", "cdc.gov"],
    },
    "health_safety": {
        "label": "Health & Safety",
        "description": "Medical care, safety, and health monitoring",
        "queries": [
            "newborn health checkup schedule",
            "baby illness warning signs",
            "safe sleep practices for infants",
            "baby first aid basics",
            "childproofing home checklist",
        ],
        "trusted_sources": ["aap.org", "cdc.gov", "mayoclinic.org", "healthychildren.org"],
    },
    "activities_play": {
        "label": "Activities & Play",
        "description": "Age-appropriate activities and play ideas",
        "queries": [
            "best advice on baby activities",
            "expert tips for infant play",
            "comprehensive baby play guide",
            "top baby activity ideas",
        ],
        "trusted_sources": ["zerotothree.org", "aap.org", "healthychildren.org"],
    },
    "behavior_discipline": {
        "label": "Behavior & Discipline",
        "description": "Behavior management and positive discipline",
        "queries": [
            "best advice on baby behavior",
            "expert tips for infant discipline",
            "comprehensive baby behavior guide",
            "top behavior management strategies",
        ],
        "trusted_sources": ["aap.org", "zerotothree.org", "healthychildren.org"],
    },
    "language_communication": {
        "label": "Speech & Language",
        "description": "Language development and communication skills",
        "queries": [
            "best advice on baby language development",
            "expert tips for speech development",
            "comprehensive language development guide",
            "top communication development strategies",
        ],
        "trusted_sources": ["asha.org", "aap.org", "healthychildren.org"],
    },
}


# ─────────────────────────────────────────────────────
# Utilities
# ─────────────────────────────────────────────────────
def write_secret_file(path: Path, content: str):
    """Write a file with 0600 permissions (owner read/write only).

    Uses os.open() with explicit mode so the file never exists with default
    (world-readable) permissions.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(content)


def topic_label(topic: str) -> str:
    """Short tag label for a topic id: 'sleep_patterns' -> 'sleep patterns'."""
    return topic.replace("_", " ")


# ─────────────────────────────────────────────────────
# Key resolution: env → config.json
# ─────────────────────────────────────────────────────
def _get_key(name: str) -> str:
    """Resolve a secret: environment variable first, then config.json."""
    val = os.environ.get(name)
    if val:
        return val
    val = load_config().get(name)
    if val:
        return val
    return ""


def get_anycrawl_key() -> str:
    return _get_key("ANYCRAWL_API_KEY")


def get_supabase_credentials() -> tuple[str, str]:
    url = _get_key("SUPABASE_URL")
    key = _get_key("SUPABASE_KEY")
    if not url or not key:
        raise ConfigError(
            "Supabase store selected but SUPABASE_URL / SUPABASE_KEY are not set.\n"
            "Set them in env or ~/.topic-curation/config.json"
        )
    return url, key


def load_config() -> dict:
    """Load config.json; a missing or unreadable file counts as empty."""
    if CONFIG_FILE.exists():
        try:
            return json.loads(CONFIG_FILE.read_text())
        except (OSError, ValueError):
            pass
    return {}


def save_config(config: dict):
    """Save config.json with restricted permissions."""
    CURATION_HOME.mkdir(parents=True, exist_ok=True)
    write_secret_file(CONFIG_FILE, json.dumps(config, indent=2))


def get_section(name: str) -> dict:
    """Return one config.json section (e.g. "search", "store") as a dict."""
    section = load_config().get(name, {})
    return section if isinstance(section, dict) else {}


def get_topic_targets(config: dict | None = None) -> dict:
    """Built-in TOPICS merged with per-topic overrides from config.json["topics"].

    An override may replace "queries" and/or "trusted_sources" for a known
    topic, or define a new topic outright.
    """
    if config is None:
        config = load_config()
    overrides = config.get("topics", {})

    targets = {}
    for topic, meta in TOPICS.items():
        targets[topic] = {
            "label": meta["label"],
            "description": meta["description"],
            "queries": list(meta["queries"]),
            "trusted_sources": list(meta["trusted_sources"]),
        }

    for topic, override in overrides.items():
        if not isinstance(override, dict):
            continue
        entry = targets.setdefault(topic, {
            "label": topic_label(topic).title(),
            "description": "",
            "queries": [],
            "trusted_sources": [],
        })
        for key in ("label", "description", "queries", "trusted_sources"):
            if key in override:
                entry[key] = override[key]

    return targets


# ─────────────────────────────────────────────────────
# First-run interactive setup
# ─────────────────────────────────────────────────────
def run_setup():
    """Interactive first-run setup — saves config.json."""
    print("\n" + "=" * 60)
    print("  Topic Content Curation — First-Run Setup")
    print("=" * 60)
    print(f"\nKeys are saved to {CONFIG_FILE}\n")

    config = load_config()

    print("1. AnyCrawl API key (required — used for topic searches)")
    print("   Get yours at: https://anycrawl.dev")
    key = input("   ANYCRAWL_API_KEY: ").strip()
    if key:
        config["ANYCRAWL_API_KEY"] = key

    print("\n2. Content store backend: 'sqlite' (local file) or 'supabase'")
    backend = input("   Backend [sqlite]: ").strip().lower() or "sqlite"
    config.setdefault("store", {})["backend"] = backend

    if backend == "supabase":
        url = input("   SUPABASE_URL: ").strip()
        if url:
            config["SUPABASE_URL"] = url
        key = input("   SUPABASE_KEY: ").strip()
        if key:
            config["SUPABASE_KEY"] = key

    save_config(config)
    print(f"\n  Config saved to {CONFIG_FILE}")
    print("  Setup complete! Run `python -m curation populate` to fill the store.\n")
    sys.exit(0)
