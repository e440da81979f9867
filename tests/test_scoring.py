"""Tests for curation/scoring.py — two-tier trust score."""

from datetime import date

import pytest

from curation.models import ContentDraft
from curation.scoring import QualityScorer

TRUSTED = ["aap.org", "cdc.gov", "healthychildren.org"]


def draft(domain):
    return ContentDraft(
        topic="health_safety", url=f"https://{domain}/a", title="T", summary="S...",
        source_domain=domain, publication_date=date(2026, 10, 18), tags=["health safety", "baby"],
    )


class TestQualityScorer:
    def test_trusted_domain_gets_high_tier(self):
        assert QualityScorer().score(draft("aap.org"), TRUSTED) == 0.85

    def test_trusted_subdomain_gets_high_tier(self):
        assert QualityScorer().score(draft("publications.aap.org"), TRUSTED) == 0.85

    def test_untrusted_gets_baseline(self):
        assert QualityScorer().score(draft("parentingblog.com"), TRUSTED) == 0.65

    def test_lookalike_domain_is_untrusted(self):
        assert QualityScorer().score(draft("fakeaap.org"), TRUSTED) == 0.65

    def test_empty_trusted_list(self):
        assert QualityScorer().score(draft("aap.org"), []) == 0.65

    def test_custom_tiers(self):
        scorer = QualityScorer(trusted_score=0.9, baseline_score=0.7)
        assert scorer.score(draft("cdc.gov"), TRUSTED) == 0.9
        assert scorer.score(draft("other.com"), TRUSTED) == 0.7

    def test_tiers_must_be_in_unit_interval(self):
        with pytest.raises(ValueError):
            QualityScorer(trusted_score=1.2)
        with pytest.raises(ValueError):
            QualityScorer(baseline_score=-0.1)

    def test_stamp_builds_item(self):
        item = QualityScorer().stamp(draft("cdc.gov"), TRUSTED)
        assert item.quality_score == 0.85
        assert item.url == "https://cdc.gov/a"
        assert item.refresh_cycle == 1
        assert item.is_active is True
        assert item.tags == ["health safety", "baby"]
