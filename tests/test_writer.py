"""Tests for curation/writer.py — all-or-nothing batch insert."""

from unittest.mock import MagicMock

import pytest

from curation.errors import StoreFailure
from curation.writer import ContentStoreWriter


class TestContentStoreWriter:
    def test_inserts_batch(self, store, make_item):
        writer = ContentStoreWriter(store)
        assert writer.insert_batch([make_item("https://a.org/1"), make_item("https://a.org/2")]) == 2
        assert store.existing_urls() == {"https://a.org/1", "https://a.org/2"}

    def test_empty_batch_skips_store(self):
        backend = MagicMock()
        assert ContentStoreWriter(backend).insert_batch([]) == 0
        backend.insert_many.assert_not_called()

    def test_duplicate_urls_in_batch_rejected_before_write(self, make_item):
        backend = MagicMock()
        with pytest.raises(StoreFailure, match="duplicate"):
            ContentStoreWriter(backend).insert_batch([make_item("https://a.org/1"), make_item("https://a.org/1")])
        backend.insert_many.assert_not_called()

    def test_store_rejection_leaves_nothing_behind(self, store, make_item):
        store.insert_many([make_item("https://a.org/taken")])
        writer = ContentStoreWriter(store)

        with pytest.raises(StoreFailure):
            writer.insert_batch([
                make_item("https://a.org/new-1"),
                make_item("https://a.org/taken"),
                make_item("https://a.org/new-2"),
            ])

        assert store.existing_urls() == {"https://a.org/taken"}

    def test_store_failure_propagates(self, make_item):
        backend = MagicMock()
        backend.name = "mock"
        backend.insert_many.side_effect = StoreFailure("disk full")
        with pytest.raises(StoreFailure, match="disk full"):
            ContentStoreWriter(backend).insert_batch([make_item("https://a.org/1")])
