"""Database engine and session helpers for the catalog."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from catalog_store.models import Base

logger = logging.getLogger(__name__)


def get_engine(database_url: str) -> Engine:
    """Create an engine for `database_url` (sqlite:///... or postgresql://...)."""
    if not database_url:
        raise ValueError("database_url is required")
    return create_engine(database_url, future=True)


def init_db(engine: Engine) -> None:
    """Create the catalog tables if they don't exist."""
    Base.metadata.create_all(engine)
    logger.info("Catalog tables ready on %s", engine.url.render_as_string(hide_password=True))


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """Context manager for a session with automatic commit/rollback."""
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
