"""Upsert canonical records into the catalog store."""

import logging

from catalog_store.store import CatalogStore
from import_optio.config import UpsertConfig
from import_optio.models import CanonicalProductRecord, RunSummary

logger = logging.getLogger(__name__)


def upsert_record(record: CanonicalProductRecord, store: CatalogStore) -> str:
    """Write one record. Returns "created", "updated" or "skipped".

    Records without a UPC are skipped without touching the store. Store
    errors propagate to the caller.
    """
    if not record.upc:
        return "skipped"
    return store.upsert(record.upc, record.to_fields())


def upsert_records(
    records: list[CanonicalProductRecord],
    store: CatalogStore,
    config: UpsertConfig | None = None,
) -> RunSummary:
    """Upsert records in order, counting outcomes and continuing past row failures."""
    config = config or UpsertConfig()
    summary = RunSummary()
    total = len(records)

    for i, record in enumerate(records, start=1):
        try:
            outcome = upsert_record(record, store)
        except Exception as e:
            logger.error("Error upserting UPC=%s: %s", record.upc, e)
            summary.failed_upcs.append(record.upc)
            outcome = "skipped"

        if outcome == "created":
            summary.created += 1
        elif outcome == "updated":
            summary.updated += 1
        else:
            summary.skipped += 1

        if config.progress_interval and i % config.progress_interval == 0:
            logger.info("Processed %d/%d rows...", i, total)

    return summary


def log_summary(summary: RunSummary, store: CatalogStore, example_limit: int = 5) -> None:
    """Log run counts and a sample of the most recently touched entries."""
    logger.info(
        "Import complete: created=%d updated=%d skipped=%d",
        summary.created,
        summary.updated,
        summary.skipped,
    )
    if not summary.touched:
        return

    limit = min(example_limit, summary.touched)
    logger.info("Example records (up to %d rows):", limit)
    for entry in store.recent(limit):
        logger.info(
            "  id=%s upc=%s description=%r size=%s width=%s model=%s brand=%s",
            entry.id,
            entry.upc,
            entry.description,
            entry.size,
            entry.width,
            entry.model_name,
            entry.brand,
        )
