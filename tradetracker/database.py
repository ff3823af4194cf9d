# tradetracker/database.py
"""
Engine and per-request sessions for the trade ledger.

SQLite (tests, local experiments) shares one connection through StaticPool
so an in-memory database survives across sessions and threads. PostgreSQL
gets a QueuePool sized from the DB_POOL_* settings.
"""

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool, QueuePool

from .config import settings

logger = logging.getLogger(__name__)


def _create_engine() -> Engine:
    if settings.is_sqlite:
        # FastAPI runs sync endpoints in a threadpool
        logger.info("Using SQLite ledger database")
        return create_engine(
            settings.database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    logger.info(
        "Using PostgreSQL ledger database "
        f"(pool {settings.db_pool_size}+{settings.db_pool_max_overflow}, "
        f"recycle {settings.db_pool_recycle}s, pre_ping={settings.db_pool_pre_ping})"
    )
    return create_engine(
        settings.database_url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_timeout=30,
        echo=settings.debug,
    )


engine = _create_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Yields one session per request and closes it afterwards.

    Services commit their own unit of work; an exception before the
    commit leaves nothing behind because the session is closed unflushed.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
