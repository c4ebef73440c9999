"""Helper functions for import_optio CLI."""

from __future__ import annotations

import argparse
from urllib.parse import urlparse

from import_optio.config import ImportConfig


def parse_import_optio_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for import_optio.'''

    parser = argparse.ArgumentParser(description="Import the Optio product feed into the UPC catalog.")
    parser.add_argument("--feed-url", default=None, help="Feed URL (default: OPTIO_FEED_URL or config)")
    parser.add_argument("--config", default=None, help="Config name (default: CONFIG_ENV or prod)")
    parser.add_argument("--dry-run", action="store_true", help="Upsert into an in-memory store only")
    parser.add_argument("--load-local", action="store_true", help="Save normalized records to output/")
    return parser.parse_args(argv)


def validate_feed_url(url: str) -> str:
    '''Return `url` if it is an http(s) URL, else raise ValueError.'''

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Feed URL must be http(s): {url!r}")
    return url


def apply_cli_overrides(config: ImportConfig, args: argparse.Namespace) -> ImportConfig:
    '''Apply --feed-url and --dry-run on top of the loaded config.'''

    if args.feed_url:
        config.feed.url = args.feed_url
    config.feed.url = validate_feed_url(config.feed.url)

    if args.dry_run:
        config.store.backend = "memory"
    return config
