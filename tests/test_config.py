"""Tests for curation/config.py — key resolution, topic targets."""

import json
import os
from unittest.mock import patch

from curation.config import TOPICS, _get_key, get_topic_targets, load_config, topic_label


class TestGetKey:
    def test_env_var_priority(self):
        with patch.dict(os.environ, {"TEST_API_KEY": "from_env"}):
            assert _get_key("TEST_API_KEY") == "from_env"

    @patch("curation.config.CONFIG_FILE")
    def test_returns_empty_for_missing(self, mock_path):
        mock_path.exists.return_value = False
        with patch.dict(os.environ, {}, clear=True):
            assert _get_key("NONEXISTENT_KEY_XYZ") == ""

    @patch("curation.config.CONFIG_FILE")
    def test_reads_from_config(self, mock_path):
        mock_path.exists.return_value = True
        mock_path.read_text.return_value = json.dumps({"ANYCRAWL_API_KEY": "from_config"})

        with patch.dict(os.environ, {}, clear=True):
            assert _get_key("ANYCRAWL_API_KEY") == "from_config"


class TestLoadConfig:
    @patch("curation.config.CONFIG_FILE")
    def test_loads_valid_json(self, mock_path):
        mock_path.exists.return_value = True
        mock_path.read_text.return_value = json.dumps({"key": "value"})
        assert load_config() == {"key": "value"}

    @patch("curation.config.CONFIG_FILE")
    def test_returns_empty_for_missing(self, mock_path):
        mock_path.exists.return_value = False
        assert load_config() == {}

    @patch("curation.config.CONFIG_FILE")
    def test_returns_empty_for_invalid_json(self, mock_path):
        mock_path.exists.return_value = True
        mock_path.read_text.return_value = "not json"
        assert load_config() == {}


class TestTopicTargets:
    def test_defaults_cover_every_topic(self):
        targets = get_topic_targets({})
        assert set(targets) == set(TOPICS)
        for entry in targets.values():
            assert entry["queries"]
            assert entry["trusted_sources"]

    def test_override_replaces_queries_only(self):
        targets = get_topic_targets({"topics": {"sleep_patterns": {"queries": ["baby nap schedule"]}}})
        assert targets["sleep_patterns"]["queries"] == ["baby nap schedule"]
        assert targets["sleep_patterns"]["trusted_sources"] == TOPICS["sleep_patterns"]["trusted_sources"]

    def test_override_does_not_mutate_builtin(self):
        get_topic_targets({"topics": {"health_safety": {"trusted_sources": ["who.int"]}}})
        assert "who.int" not in TOPICS["health_safety"]["trusted_sources"]

    def test_new_topic_from_config(self):
        targets = get_topic_targets({"topics": {"toilet_training": {
            "queries": ["potty training tips"], "trusted_sources": ["aap.org"],
        }}})
        assert targets["toilet_training"]["label"] == "Toilet Training"
        assert targets["toilet_training"]["queries"] == ["potty training tips"]

    def test_topic_label(self):
        assert topic_label("sleep_patterns") == "sleep patterns"
        assert topic_label("health_safety") == "health safety"
