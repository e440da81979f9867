"""Two-tier trust score from a topic's authoritative-domain list."""

from .config import BASELINE_SCORE, TRUSTED_SCORE
from .models import ContentDraft, ContentItem
from .normalize import domain_matches


class QualityScorer:
    """Trusted domains get `trusted_score`, everything else `baseline_score`."""

    def __init__(self, trusted_score: float = TRUSTED_SCORE, baseline_score: float = BASELINE_SCORE):
        for value in (trusted_score, baseline_score):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"score tiers must be within [0, 1], got {value}")
        self.trusted_score = trusted_score
        self.baseline_score = baseline_score

    def score(self, draft: ContentDraft, trusted_domains) -> float:
        if domain_matches(draft.source_domain, trusted_domains):
            return self.trusted_score
        return self.baseline_score

    def stamp(self, draft: ContentDraft, trusted_domains) -> ContentItem:
        return ContentItem.from_draft(draft, self.score(draft, trusted_domains))
