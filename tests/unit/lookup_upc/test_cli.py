"""Tests for lookup_upc.cli module."""

import json

import pytest

from catalog_store.store import SqlCatalogStore
from lookup_upc.cli import EXIT_BAD_INPUT, EXIT_FATAL, EXIT_NOT_FOUND, main


@pytest.fixture
def database_url(monkeypatch, tmp_path) -> str:
    url = f"sqlite:///{tmp_path / 'catalog.db'}"
    monkeypatch.delenv("CONFIG_ENV", raising=False)
    monkeypatch.setenv("DATABASE_URL", url)
    return url


class TestMain:
    def test_prints_found_entry(self, database_url, capsys) -> None:
        SqlCatalogStore.from_url(database_url).upsert("190340661600", {"size": "7", "width": "D"})

        main(["190340661600"])

        output = json.loads(capsys.readouterr().out)
        assert output["ok"] is True
        assert output["upc"] == "190340661600"
        assert output["width"] == "D"

    def test_not_found_exit_code(self, database_url, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["1903-4066-1600"])
        assert exc.value.code == EXIT_NOT_FOUND
        assert json.loads(capsys.readouterr().out)["upc"] == "190340661600"

    def test_missing_upc_exit_code(self, database_url) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["no digits"])
        assert exc.value.code == EXIT_BAD_INPUT

    def test_missing_config_exit_code(self, database_url) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["190340661600", "--config", "does-not-exist"])
        assert exc.value.code == EXIT_FATAL

    def test_unreachable_database_exit_code(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("CONFIG_ENV", raising=False)
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'missing-dir' / 'catalog.db'}")
        with pytest.raises(SystemExit) as exc:
            main(["190340661600"])
        assert exc.value.code == EXIT_FATAL
