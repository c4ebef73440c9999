"""Configuration loader for import_optio."""

from dataclasses import dataclass, field
from pathlib import Path

from common.config import env_override, find_config_path, load_yaml

CONFIG_DIR = Path(__file__).parent / "configs"

DEFAULT_FEED_URL = "https://app.getopt.io/app/api.php?p=udswksyt"
DEFAULT_DATABASE_URL = "sqlite:///dev.db"
DEFAULT_DELIMITERS = (",", "\t", "|", ";", " - ")


@dataclass
class FeedConfig:
    url: str = DEFAULT_FEED_URL
    request_timeout: float | None = None  # None waits indefinitely


@dataclass
class DetectConfig:
    sample_size: int = 20
    missing_upc_ratio: float = 0.6
    upc_prefixed_line_threshold: int = 3
    delimiters: tuple[str, ...] = DEFAULT_DELIMITERS


@dataclass
class UpsertConfig:
    progress_interval: int = 500
    example_limit: int = 5


@dataclass
class StoreConfig:
    backend: str = "sqlalchemy"  # "sqlalchemy" or "memory"
    database_url: str = DEFAULT_DATABASE_URL


@dataclass
class ImportConfig:
    feed: FeedConfig = field(default_factory=FeedConfig)
    detect: DetectConfig = field(default_factory=DetectConfig)
    upsert: UpsertConfig = field(default_factory=UpsertConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


def load_config(config_name: str | None = None) -> ImportConfig:
    """Load configuration from YAML, then apply env overrides.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CONFIG_ENV env var or "prod".

    Returns:
        Loaded ImportConfig object
    """
    config_path = find_config_path(config_name, CONFIG_DIR, env_var="CONFIG_ENV")
    config = _parse_config(load_yaml(config_path))

    config.feed.url = env_override("OPTIO_FEED_URL", config.feed.url)
    config.store.database_url = env_override("DATABASE_URL", config.store.database_url)
    return config


def _parse_config(data: dict) -> ImportConfig:
    """Parse config dictionary into ImportConfig object."""
    feed_data = data.get("feed") or {}
    detect_data = data.get("detect") or {}
    upsert_data = data.get("upsert") or {}
    store_data = data.get("store") or {}

    timeout = feed_data.get("request_timeout")
    feed = FeedConfig(
        url=feed_data.get("url") or DEFAULT_FEED_URL,
        request_timeout=float(timeout) if timeout is not None else None,
    )

    detect = DetectConfig(
        sample_size=int(detect_data.get("sample_size", 20)),
        missing_upc_ratio=float(detect_data.get("missing_upc_ratio", 0.6)),
        upc_prefixed_line_threshold=int(detect_data.get("upc_prefixed_line_threshold", 3)),
        delimiters=tuple(detect_data.get("delimiters") or DEFAULT_DELIMITERS),
    )
    if not 0 < detect.missing_upc_ratio <= 1:
        raise ValueError(f"missing_upc_ratio must be in (0, 1], got {detect.missing_upc_ratio}")

    upsert = UpsertConfig(
        progress_interval=int(upsert_data.get("progress_interval", 500)),
        example_limit=int(upsert_data.get("example_limit", 5)),
    )

    store = StoreConfig(
        backend=store_data.get("backend", "sqlalchemy"),
        database_url=store_data.get("database_url") or DEFAULT_DATABASE_URL,
    )

    return ImportConfig(feed=feed, detect=detect, upsert=upsert, store=store)
