"""Normalize raw feed rows into canonical product records.

Two row shapes are supported:

- object rows (dicts from JSON or delimited parsing), matched by field aliases
- text lines such as ``190340661600    M QW-K v4 081 Black/Grey/Nightlife 7 D``
"""

import logging
import re
from typing import Any, Mapping, Optional

from common.utils import digits_only, first_non_empty
from import_optio.models import CanonicalProductRecord, RawRecord

logger = logging.getLogger(__name__)

UPC_FIELDS = ("upc", "barcode", "gtin", "sku", "upc_code", "upc13", "ean", "ean13")
DESCRIPTION_FIELDS = ("description", "desc", "product", "name")
SIZE_FIELDS = ("size", "shoe_size", "us_size", "uk_size")
WIDTH_FIELDS = ("width", "shoe_width")
MODEL_FIELDS = ("model", "modelname", "style", "style_number")
BRAND_FIELDS = ("brand", "manufacturer", "maker")
IMAGE_FIELDS = ("image", "image_url", "imageurl", "picture")

UPC_PATTERN = re.compile(r"\d{8,14}")

# upc, optional alphabetic gender marker, description, size, width
LINE_PATTERN = re.compile(
    r"^(\d{8,14})\s+(?:([A-Za-z]+)\s+)?(.+?)\s+(\d{1,2}(?:\.\d+)?)\s+([A-Za-z0-9]+)\s*$"
)
GENDER_TOKEN = re.compile(r"[A-Za-z]")


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _normalize_keys(raw: Mapping[Any, Any]) -> dict[str, str]:
    """Lower-case and trim keys, stringify and trim values."""
    normalized = {}
    for key, value in raw.items():
        normalized[str(key).strip().lower()] = _stringify(value)
    return normalized


def _find_upc(values: dict[str, str]) -> str:
    upc = first_non_empty(values, *UPC_FIELDS)
    if not upc:
        # No named UPC column: take the first value that is a bare 8-14 digit code
        for value in values.values():
            candidate = digits_only(value)
            if UPC_PATTERN.fullmatch(candidate):
                upc = candidate
                break
    return digits_only(upc)


def normalize_object_row(raw: Any) -> CanonicalProductRecord:
    """Normalize a keyed row. Always returns a record, possibly with an empty upc."""
    values = _normalize_keys(raw) if isinstance(raw, Mapping) else {}

    return CanonicalProductRecord(
        upc=_find_upc(values),
        description=first_non_empty(values, *DESCRIPTION_FIELDS),
        size=first_non_empty(values, *SIZE_FIELDS),
        width=first_non_empty(values, *WIDTH_FIELDS),
        model_name=first_non_empty(values, *MODEL_FIELDS),
        brand=first_non_empty(values, *BRAND_FIELDS),
        image_url=first_non_empty(values, *IMAGE_FIELDS),
        metadata=raw,
    )


def parse_line_format(line: str) -> Optional[CanonicalProductRecord]:
    """Match a line against the structured UPC/description/size/width layout."""
    match = LINE_PATTERN.match(line)
    if not match:
        return None
    return CanonicalProductRecord(
        upc=digits_only(match.group(1)),
        description=match.group(3).strip(),
        size=match.group(4).strip(),
        width=match.group(5).strip(),
        metadata={"raw_line": line},
    )


def parse_line_tokens(line: str) -> Optional[CanonicalProductRecord]:
    """Guess fields from whitespace tokens: upc first, size and width last."""
    tokens = line.split()
    if len(tokens) < 3 or not UPC_PATTERN.fullmatch(tokens[0]):
        return None

    description_tokens = tokens[1:max(1, len(tokens) - 2)]
    if description_tokens and GENDER_TOKEN.fullmatch(description_tokens[0]):
        description_tokens = description_tokens[1:]

    return CanonicalProductRecord(
        upc=tokens[0],
        description=" ".join(description_tokens),
        size=tokens[-2],
        width=tokens[-1],
        metadata={"raw_line": line},
    )


def normalize_line_row(line: str) -> Optional[CanonicalProductRecord]:
    """Normalize a text line, or return None if neither strategy fits."""
    return parse_line_format(line) or parse_line_tokens(line)


def normalize_row(raw: RawRecord) -> Optional[CanonicalProductRecord]:
    """Normalize one raw record of either form."""
    if isinstance(raw, str):
        return normalize_line_row(raw.strip())
    return normalize_object_row(raw)


def normalize_rows(rows: list[RawRecord]) -> list[CanonicalProductRecord]:
    """Normalize raw rows in order, dropping rows no strategy can shape."""
    records = []
    for raw in rows:
        record = normalize_row(raw)
        if record is not None:
            records.append(record)

    dropped = len(rows) - len(records)
    if dropped:
        logger.info("Dropped %d unrecognised rows", dropped)
    return records
