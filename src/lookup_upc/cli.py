"""CLI for looking up a UPC in the product catalog."""

from __future__ import annotations

import argparse
import json
import logging

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from catalog_store.store import build_store
from common.cli_helpers import EXIT_FATAL, setup_logging
from common.serialization import serialize_dataclass
from common.utils import digits_only
from import_optio.config import load_config
from lookup_upc.lookup import lookup_upc

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 1
EXIT_BAD_INPUT = EXIT_FATAL


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the catalog entry for a UPC as JSON.")
    parser.add_argument("upc", help="Scanned code; non-digits are ignored")
    parser.add_argument("--config", default=None, help="Config name (default: CONFIG_ENV or prod)")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        store = build_store(config.store.backend, config.store.database_url)
    except (FileNotFoundError, ValueError, SQLAlchemyError) as e:
        logger.error("Lookup failed: %s", e)
        raise SystemExit(EXIT_FATAL) from e

    try:
        entry = lookup_upc(args.upc, store)
    except ValueError as e:
        logger.error("%s", e)
        raise SystemExit(EXIT_BAD_INPUT) from e
    except SQLAlchemyError as e:
        logger.error("Lookup failed: %s", e)
        raise SystemExit(EXIT_FATAL) from e

    if entry is None:
        print(json.dumps({"ok": False, "error": "not found", "upc": digits_only(args.upc)}))
        raise SystemExit(EXIT_NOT_FOUND)

    print(json.dumps({"ok": True, **serialize_dataclass(entry)}, default=str, ensure_ascii=False))


if __name__ == "__main__":
    main()
