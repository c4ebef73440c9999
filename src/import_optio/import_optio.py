"""Fetch, parse, normalize and upsert the Optio product feed."""

import logging

from catalog_store.store import CatalogStore
from import_optio.config import ImportConfig
from import_optio.detect_format import detect_format
from import_optio.fetch_feed import fetch_feed
from import_optio.models import CanonicalProductRecord, ParsedFeed, RunSummary
from import_optio.normalize_rows import normalize_rows
from import_optio.upsert_records import log_summary, upsert_records

logger = logging.getLogger(__name__)


def parse_feed(text: str, config: ImportConfig) -> tuple[ParsedFeed, list[CanonicalProductRecord]]:
    """Detect the feed format and normalize every row."""
    parsed = detect_format(text, config.detect)
    records = normalize_rows(parsed.rows)
    logger.info(
        "Parsed %d rows (parser: %s), processing...",
        len(records),
        parsed.format.value,
    )
    return parsed, records


def import_optio(
    store: CatalogStore,
    config: ImportConfig,
    records: list[CanonicalProductRecord] | None = None,
) -> RunSummary:
    """Run one import against `store`.

    If `records` is None the feed is fetched and parsed first; fetch errors
    propagate before anything is written.
    """
    if records is None:
        text = fetch_feed(config.feed.url, timeout=config.feed.request_timeout)
        _, records = parse_feed(text, config)

    summary = upsert_records(records, store, config.upsert)
    log_summary(summary, store, config.upsert.example_limit)
    return summary
