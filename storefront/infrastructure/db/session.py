# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from storefront.shared.config import DatabaseConfig, load_config
from storefront.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(database: DatabaseConfig) -> Engine:
    """Create the engine; SQLite gets thread-sharing and enforced foreign keys."""
    if not database.url.startswith("sqlite"):
        return create_engine(
            database.url,
            pool_pre_ping=True,
            pool_size=database.pool_size,
            max_overflow=database.max_overflow,
            pool_timeout=database.pool_timeout,
        )

    engine = create_engine(
        database.url,
        connect_args={"check_same_thread": False, "timeout": int(database.pool_timeout)},
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


ENGINE: Engine = build_engine(load_config().database)

SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, expire_on_commit=False)
)


@contextmanager
def session_scope() -> Iterator[Session]:
    """One transaction per block: commit on success, roll back and re-raise on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("db.session: transaction rolled back")
        raise
    finally:
        session.close()
        SessionLocal.remove()


def init_db() -> None:
    # Registers the mapped tables on Base.metadata.
    from storefront.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info(f"db: schema ensured on {ENGINE.url.get_backend_name()}")
