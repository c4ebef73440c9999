"""Tests for import_optio.cli module."""

import json
from unittest.mock import patch

import pytest

from import_optio.cli import EXIT_FATAL, main
from import_optio.fetch_feed import FeedFetchError

LINE_FEED = "190340661600    M QW-K v4 081 Black/Grey/Nightlife 7 D\n"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("OPTIO_FEED_URL", "DATABASE_URL", "CONFIG_ENV"):
        monkeypatch.delenv(name, raising=False)


@patch("import_optio.cli.fetch_feed")
class TestMain:
    def test_fetch_failure_exits_with_fatal_status(self, mock_fetch) -> None:
        mock_fetch.side_effect = FeedFetchError("Feed fetch failed: HTTP 500")
        with pytest.raises(SystemExit) as exc:
            main(["--dry-run"])
        assert exc.value.code == EXIT_FATAL

    def test_invalid_feed_url_exits_with_fatal_status(self, mock_fetch) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--dry-run", "--feed-url", "not-a-url"])
        assert exc.value.code == EXIT_FATAL
        mock_fetch.assert_not_called()

    def test_writes_to_sqlite_store(self, mock_fetch, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'catalog.db'}")
        mock_fetch.return_value = LINE_FEED

        main([])

        from catalog_store.store import SqlCatalogStore

        store = SqlCatalogStore.from_url(f"sqlite:///{tmp_path / 'catalog.db'}")
        assert store.get("190340661600").width == "D"

    def test_load_local_saves_normalized_records(self, mock_fetch, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        mock_fetch.return_value = LINE_FEED

        main(["--dry-run", "--load-local"])

        files = list((tmp_path / "output").glob("normalized_records_*.jsonl"))
        assert len(files) == 1
        record = json.loads(files[0].read_text().splitlines()[0])
        assert record["upc"] == "190340661600"
        assert record["metadata"] == {"raw_line": LINE_FEED.strip()}
