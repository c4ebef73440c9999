"""Tests for import_optio.config module."""

import pytest

from import_optio.config import (
    DEFAULT_DATABASE_URL,
    DEFAULT_DELIMITERS,
    DEFAULT_FEED_URL,
    _parse_config,
    load_config,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("OPTIO_FEED_URL", "DATABASE_URL", "CONFIG_ENV"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_prod_defaults(self) -> None:
        config = load_config("prod")
        assert config.feed.url == DEFAULT_FEED_URL
        assert config.feed.request_timeout is None
        assert config.detect.sample_size == 20
        assert config.detect.missing_upc_ratio == 0.6
        assert config.detect.upc_prefixed_line_threshold == 3
        assert config.detect.delimiters == DEFAULT_DELIMITERS
        assert config.upsert.progress_interval == 500
        assert config.store.backend == "sqlalchemy"

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("OPTIO_FEED_URL", "https://example.com/feed.txt")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
        config = load_config("prod")
        assert config.feed.url == "https://example.com/feed.txt"
        assert config.store.database_url == "sqlite:///other.db"

    def test_blank_env_is_ignored(self, monkeypatch) -> None:
        monkeypatch.setenv("OPTIO_FEED_URL", "  ")
        assert load_config("prod").feed.url == DEFAULT_FEED_URL

    def test_config_env_selects_file(self, monkeypatch) -> None:
        monkeypatch.setenv("CONFIG_ENV", "local")
        config = load_config()
        assert config.store.backend == "memory"
        assert config.upsert.progress_interval == 100

    def test_missing_config_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("does-not-exist")


class TestParseConfig:
    def test_empty_dict_uses_defaults(self) -> None:
        config = _parse_config({})
        assert config.feed.url == DEFAULT_FEED_URL
        assert config.store.database_url == DEFAULT_DATABASE_URL
        assert config.upsert.example_limit == 5

    def test_rejects_bad_ratio(self) -> None:
        with pytest.raises(ValueError):
            _parse_config({"detect": {"missing_upc_ratio": 1.5}})
