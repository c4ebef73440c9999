"""Catalog store implementations keyed by UPC.

Both stores satisfy the same small contract used by the import pipeline:

    upsert(upc, fields) -> "created" | "updated"
    get(upc) -> CatalogEntry | None
    recent(limit) -> list[CatalogEntry]

`fields` uses the canonical record names (description, size, width,
model_name, brand, image_url, metadata). Fields absent from `fields` keep
their existing value on update.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Literal, Protocol

from sqlalchemy import select
from sqlalchemy.engine import Engine

from catalog_store.connection import get_engine, get_session, init_db
from catalog_store.models import CatalogEntry, ProductUPC, utcnow

logger = logging.getLogger(__name__)

UpsertOutcome = Literal["created", "updated"]

ENTRY_FIELDS = ("description", "size", "width", "model_name", "brand", "image_url")


class CatalogStore(Protocol):
    def upsert(self, upc: str, fields: dict[str, Any]) -> UpsertOutcome: ...

    def get(self, upc: str) -> CatalogEntry | None: ...

    def recent(self, limit: int) -> list[CatalogEntry]: ...


def _check_fields(fields: dict[str, Any]) -> None:
    unknown = set(fields) - set(ENTRY_FIELDS) - {"metadata"}
    if unknown:
        raise ValueError(f"Unknown catalog fields: {', '.join(sorted(unknown))}")


class SqlCatalogStore:
    """SQLAlchemy-backed store. Each upsert commits in its own transaction."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "SqlCatalogStore":
        engine = get_engine(database_url)
        init_db(engine)
        return cls(engine)

    def upsert(self, upc: str, fields: dict[str, Any]) -> UpsertOutcome:
        if not upc:
            raise ValueError("upc is required")
        _check_fields(fields)

        with get_session(self.engine) as session:
            row = session.execute(
                select(ProductUPC).where(ProductUPC.upc == upc)
            ).scalar_one_or_none()

            outcome: UpsertOutcome = "updated"
            if row is None:
                row = ProductUPC(upc=upc)
                session.add(row)
                outcome = "created"

            for name in ENTRY_FIELDS:
                if name in fields:
                    setattr(row, name, fields[name])
            if "metadata" in fields:
                row.metadata_json = fields["metadata"]
            row.updated_at = utcnow()

        return outcome

    def get(self, upc: str) -> CatalogEntry | None:
        with get_session(self.engine) as session:
            row = session.execute(
                select(ProductUPC).where(ProductUPC.upc == upc)
            ).scalar_one_or_none()
            return CatalogEntry.from_row(row) if row is not None else None

    def recent(self, limit: int) -> list[CatalogEntry]:
        if limit <= 0:
            return []
        with get_session(self.engine) as session:
            rows = session.execute(
                select(ProductUPC)
                .order_by(ProductUPC.updated_at.desc(), ProductUPC.id.desc())
                .limit(limit)
            ).scalars().all()
            return [CatalogEntry.from_row(row) for row in rows]


class InMemoryCatalogStore:
    """Dict-backed store used for dry runs."""

    def __init__(self):
        self._entries: dict[str, CatalogEntry] = {}
        self._touched: list[str] = []

    def upsert(self, upc: str, fields: dict[str, Any]) -> UpsertOutcome:
        if not upc:
            raise ValueError("upc is required")
        _check_fields(fields)

        now = utcnow()
        entry = self._entries.get(upc)
        outcome: UpsertOutcome = "updated"
        if entry is None:
            entry = CatalogEntry(
                id=len(self._entries) + 1,
                upc=upc,
                description=None,
                size=None,
                width=None,
                model_name=None,
                brand=None,
                image_url=None,
                metadata=None,
                created_at=now,
                updated_at=now,
            )
            self._entries[upc] = entry
            outcome = "created"

        for name in ENTRY_FIELDS:
            if name in fields:
                setattr(entry, name, fields[name])
        if "metadata" in fields:
            entry.metadata = copy.deepcopy(fields["metadata"])
        entry.updated_at = now

        if upc in self._touched:
            self._touched.remove(upc)
        self._touched.append(upc)
        return outcome

    def get(self, upc: str) -> CatalogEntry | None:
        entry = self._entries.get(upc)
        return copy.deepcopy(entry) if entry is not None else None

    def recent(self, limit: int) -> list[CatalogEntry]:
        if limit <= 0:
            return []
        upcs = self._touched[-limit:][::-1]
        return [copy.deepcopy(self._entries[upc]) for upc in upcs]

    def __len__(self) -> int:
        return len(self._entries)


def build_store(backend: str, database_url: str | None = None) -> CatalogStore:
    """Build a catalog store for the configured backend ("sqlalchemy" or "memory")."""
    if backend == "memory":
        logger.info("Using in-memory catalog store")
        return InMemoryCatalogStore()
    if backend == "sqlalchemy":
        if not database_url:
            raise ValueError("DATABASE_URL is required for the sqlalchemy store")
        return SqlCatalogStore.from_url(database_url)
    raise ValueError(f"Unknown store backend: {backend}")
