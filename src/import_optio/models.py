"""Data models for the Optio import pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# Object-form rows (JSON or delimited) or a single trimmed text line
RawRecord = Union[dict[str, Any], str]


class DetectedFormat(str, Enum):
    JSON = "json"
    DELIMITED = "delimited"
    LINE = "line"


@dataclass
class ParsedFeed:
    """Raw rows from a feed body plus the format they were parsed with."""
    format: DetectedFormat
    rows: list[RawRecord]


@dataclass
class CanonicalProductRecord:
    """Format-independent product record. Only `upc` is needed to persist it."""
    upc: str
    description: str = ""
    size: str = ""
    width: str = ""
    model_name: str = ""
    brand: str = ""
    image_url: str = ""
    metadata: Any = None

    def to_fields(self) -> dict[str, Any]:
        """Catalog fields for an upsert; empty strings are left out."""
        fields = {
            name: value
            for name, value in (
                ("description", self.description),
                ("size", self.size),
                ("width", self.width),
                ("model_name", self.model_name),
                ("brand", self.brand),
                ("image_url", self.image_url),
            )
            if value
        }
        fields["metadata"] = self.metadata
        return fields


@dataclass
class RunSummary:
    created: int = 0
    updated: int = 0
    skipped: int = 0
    failed_upcs: list[str] = field(default_factory=list)

    @property
    def touched(self) -> int:
        return self.created + self.updated
