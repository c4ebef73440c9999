"""Common CLI helper utilities shared by the import and lookup commands."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from common.serialization import serialize_dataclass

# Exit status for errors that stop a command before it does any work
EXIT_FATAL = 2

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure console logging at `level`, or LOG_LEVEL, defaulting to INFO."""
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def save_records_jsonl(
    records: list[Any],
    prefix: str,
    timestamp: datetime,
    output_dir: str = "output",
) -> Path:
    """Write dataclass records to `<output_dir>/<prefix>_<timestamp>.jsonl`.

    Returns:
        Path to the created file.
    """
    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True)
    filepath = output_path / f"{prefix}_{timestamp.strftime('%Y_%m_%d_%H_%M')}.jsonl"
    with filepath.open("w") as f:
        for record in records:
            f.write(json.dumps(serialize_dataclass(record), default=str, ensure_ascii=False) + "\n")
    return filepath
