"""Per-topic outcome record for one populate run."""

import json
from datetime import datetime, timezone
from pathlib import Path


class RunState:
    """Tracks the outcome of every topic in a populate run.

    Each topic records: status (done/failed), timestamp, inserted count,
    failed queries, and the failure reason when there is one.
    """

    def __init__(self, run_id: str, topics: list[str] | None = None):
        self.run_id = run_id
        self.started_at = datetime.now(timezone.utc).isoformat()
        self.topics = list(topics or [])
        self.results: dict[str, dict] = {}

    def complete_topic(self, topic: str, inserted_count: int, failed_queries=None, rejected=None):
        """Mark a topic as stored with its inserted count."""
        self.results[topic] = {
            "status": "done",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "inserted_count": inserted_count,
            "failed_queries": list(failed_queries or []),
            "rejected": dict(rejected or {}),
        }

    def fail_topic(self, topic: str, error: str = "", failed_queries=None):
        """Mark a topic as failed; nothing from it was stored."""
        self.results[topic] = {
            "status": "failed",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "inserted_count": 0,
            "failed_queries": list(failed_queries or []),
            "error": error,
        }

    def is_done(self, topic: str) -> bool:
        return self.results.get(topic, {}).get("status") == "done"

    def is_failed(self, topic: str) -> bool:
        return self.results.get(topic, {}).get("status") == "failed"

    @property
    def total_inserted(self) -> int:
        return sum(r.get("inserted_count", 0) for r in self.results.values())

    @property
    def failed_topics(self) -> list[str]:
        return [t for t in self.results if self.is_failed(t)]

    def report(self) -> list[dict]:
        """One {topic, inserted_count} or {topic, error} entry per topic."""
        out = []
        for topic in self.topics:
            entry = self.results.get(topic)
            if entry is None:
                out.append({"topic": topic, "error": "not run"})
            elif entry["status"] == "done":
                out.append({"topic": topic, "inserted_count": entry["inserted_count"]})
            else:
                out.append({"topic": topic, "error": entry.get("error", "")})
        return out

    def summary(self) -> str:
        """Human-readable status of all topics."""
        lines = []
        for topic in self.topics:
            entry = self.results.get(topic, {})
            status = entry.get("status", "pending")
            marker = {"done": "+", "failed": "!", "pending": " "}.get(status, "?")
            line = f"  [{marker}] {topic}"
            if status == "done":
                line += f": {entry['inserted_count']} inserted"
                if entry["failed_queries"]:
                    line += f" ({len(entry['failed_queries'])} queries failed)"
            elif status == "failed":
                line += f": {entry.get('error', '')}"
            lines.append(line)
        lines.append(f"  total inserted: {self.total_inserted}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "topics": self.topics,
            "results": self.results,
        }

    def save(self, path: Path):
        """Write the run record to disk."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False))
