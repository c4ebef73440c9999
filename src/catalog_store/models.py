"""SQLAlchemy models for the product-UPC catalog."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ProductUPC(Base):
    """One catalog row per UPC."""

    __tablename__ = "product_upcs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    upc: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    size: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    width: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    model_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    brand: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_json: Mapped[Optional[Any]] = mapped_column("metadata", JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


@dataclass
class CatalogEntry:
    """Detached snapshot of a catalog row."""
    id: Optional[int]
    upc: str
    description: Optional[str]
    size: Optional[str]
    width: Optional[str]
    model_name: Optional[str]
    brand: Optional[str]
    image_url: Optional[str]
    metadata: Any
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: ProductUPC) -> "CatalogEntry":
        return cls(
            id=row.id,
            upc=row.upc,
            description=row.description,
            size=row.size,
            width=row.width,
            model_name=row.model_name,
            brand=row.brand,
            image_url=row.image_url,
            metadata=row.metadata_json,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
