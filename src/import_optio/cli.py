"""CLI for importing the Optio feed into the product-UPC catalog.

Usage:
    DATABASE_URL=sqlite:///dev.db optio-import
    OPTIO_FEED_URL=https://example.com/feed.txt optio-import --dry-run
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from catalog_store.store import build_store
from common.cli_helpers import EXIT_FATAL, save_records_jsonl, setup_logging
from import_optio.config import load_config
from import_optio.fetch_feed import FeedFetchError, fetch_feed
from import_optio.helpers import apply_cli_overrides, parse_import_optio_args
from import_optio.import_optio import import_optio, parse_feed

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_import_optio_args(argv)

    try:
        config = apply_cli_overrides(load_config(args.config), args)
        text = fetch_feed(config.feed.url, timeout=config.feed.request_timeout)
        _, records = parse_feed(text, config)

        if args.load_local:
            now = datetime.now(timezone.utc)
            filepath = save_records_jsonl(records, "normalized_records", now)
            logger.info("Saved %d normalized records to %s", len(records), filepath)

        store = build_store(config.store.backend, config.store.database_url)
        import_optio(store, config, records=records)
    except (FeedFetchError, FileNotFoundError, ValueError, SQLAlchemyError) as e:
        logger.error("Import failed: %s", e)
        raise SystemExit(EXIT_FATAL) from e


if __name__ == "__main__":
    main()
