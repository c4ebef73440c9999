"""Tests for lookup_upc.lookup module."""

from unittest.mock import Mock

import pytest

from catalog_store.store import InMemoryCatalogStore
from lookup_upc.lookup import lookup_upc


class TestLookupUpc:
    def test_normalizes_scanned_code(self) -> None:
        store = InMemoryCatalogStore()
        store.upsert("012345678905", {"description": "Ghost 15"})

        entry = lookup_upc(" 0-12345-67890-5 ", store)

        assert entry.description == "Ghost 15"

    def test_missing_returns_none(self) -> None:
        assert lookup_upc("12345678", InMemoryCatalogStore()) is None

    def test_no_digits_raises(self) -> None:
        store = Mock()
        with pytest.raises(ValueError, match="missing upc"):
            lookup_upc("abc", store)
        store.get.assert_not_called()
