"""Look up a scanned UPC in the catalog."""

import logging

from catalog_store.models import CatalogEntry
from catalog_store.store import CatalogStore
from common.utils import digits_only

logger = logging.getLogger(__name__)


def lookup_upc(raw: str, store: CatalogStore) -> CatalogEntry | None:
    """Normalize a scanned code to digits and fetch its catalog entry.

    Raises:
        ValueError: if `raw` contains no digits.
    """
    upc = digits_only(raw)
    if not upc:
        raise ValueError("missing upc")

    entry = store.get(upc)
    if entry is None:
        logger.info("UPC %s not found", upc)
    return entry
