"""Detect the shape of a feed body and split it into raw rows.

Strategies are tried in order: JSON, delimited, then one record per line.
A delimited result is only kept if a sample of its rows looks like product
data; otherwise the body is re-read line by line.
"""

import csv
import io
import json
import logging
import math
import re
from typing import Optional

from import_optio.config import DetectConfig
from import_optio.models import DetectedFormat, ParsedFeed
from import_optio.normalize_rows import normalize_object_row

logger = logging.getLogger(__name__)

JSON_ARRAY_KEYS = ("data", "rows", "items", "results")
UPC_PREFIXED_LINE = re.compile(r"^\d{8,14}\s+")
LINE_BREAK = re.compile(r"\r?\n")


class DelimitedParseError(ValueError):
    """A body does not form a consistent table for a delimiter."""


def split_lines(text: str) -> list[str]:
    """Return the non-empty, trimmed lines of `text`."""
    return [line.strip() for line in LINE_BREAK.split(text) if line.strip()]


def try_parse_json(text: str) -> Optional[list]:
    """Parse `text` as a JSON array, or an object wrapping one."""
    try:
        value = json.loads(text)
    except ValueError:
        return None

    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        for key in JSON_ARRAY_KEYS:
            if isinstance(value.get(key), list):
                return value[key]
    return None


def _split_rows(text: str, delimiter: str) -> list[list[str]]:
    if len(delimiter) == 1:
        reader = csv.reader(io.StringIO(text), delimiter=delimiter, strict=True)
        rows = list(reader)
    else:
        rows = [line.split(delimiter) for line in LINE_BREAK.split(text)]
    return [[field.strip() for field in row] for row in rows if any(field.strip() for field in row)]


def parse_delimited(text: str, delimiter: str) -> list[dict[str, str]]:
    """Parse a header row plus data rows into dicts keyed by header.

    Raises:
        DelimitedParseError: if a data row's width differs from the header's.
    """
    try:
        rows = _split_rows(text, delimiter)
    except csv.Error as e:
        raise DelimitedParseError(str(e)) from e

    if not rows:
        return []

    header, data = rows[0], rows[1:]
    records = []
    for line_number, row in enumerate(data, start=2):
        if len(row) != len(header):
            raise DelimitedParseError(
                f"Row {line_number} has {len(row)} fields, header has {len(header)}"
            )
        records.append(dict(zip(header, row)))
    return records


def try_parse_delimited(text: str, delimiters: tuple[str, ...]) -> Optional[list[dict[str, str]]]:
    """Return rows for the first delimiter that yields a non-empty table."""
    for delimiter in delimiters:
        try:
            records = parse_delimited(text, delimiter)
        except DelimitedParseError as e:
            logger.debug("Delimiter %r rejected: %s", delimiter, e)
            continue
        if records and len(records[0]) >= 1:
            return records
    return None


def needs_line_fallback(rows: list[dict[str, str]], text: str, config: DetectConfig) -> bool:
    """Decide whether a delimited parse should be discarded for line parsing."""
    if not rows:
        return True

    sample = rows[: config.sample_size]
    missing_upc = sum(1 for row in sample if not normalize_object_row(row).upc)
    if missing_upc >= math.ceil(len(sample) * config.missing_upc_ratio):
        logger.info("%d/%d sampled rows have no UPC", missing_upc, len(sample))
        return True

    lines = split_lines(text)[: config.sample_size]
    prefixed = sum(1 for line in lines if UPC_PREFIXED_LINE.match(line))
    if prefixed >= config.upc_prefixed_line_threshold:
        logger.info("%d of the first %d lines start with a UPC", prefixed, len(lines))
        return True

    return False


def detect_format(text: str, config: DetectConfig | None = None) -> ParsedFeed:
    """Pick one parsing strategy for the whole body and return its raw rows."""
    config = config or DetectConfig()

    json_rows = try_parse_json(text)
    if json_rows is not None:
        return ParsedFeed(format=DetectedFormat.JSON, rows=json_rows)

    delimited_rows = try_parse_delimited(text, config.delimiters)
    if delimited_rows and not needs_line_fallback(delimited_rows, text, config):
        return ParsedFeed(format=DetectedFormat.DELIMITED, rows=delimited_rows)

    if delimited_rows:
        logger.info("Delimited parse rejected, falling back to line parsing")
    return ParsedFeed(format=DetectedFormat.LINE, rows=split_lines(text))
