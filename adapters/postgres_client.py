from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings

logger = logging.getLogger("coffeetracker.postgres")


class PostgresClient:
    """
    Owns the SQLAlchemy engine and session factory for one process.

    Constructed once by the entry point (CLI script or API lifespan) and passed
    to repositories and migrations; nothing in the package holds a global engine.
    """

    def __init__(self, database_url: str, echo: bool = False, engine: Optional[Engine] = None):
        self.database_url = database_url
        self.engine = engine or create_engine(database_url, echo=echo, future=True, pool_pre_ping=True)
        self._session_factory = sessionmaker(bind=self.engine, future=True, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresClient":
        """Build a client from settings; raises ConfigurationError if DATABASE_URL is unset"""
        return cls(settings.require_database_url(), echo=settings.db_echo)

    def session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Connection inside a single transaction; commits on exit, rolls back on error"""
        with self.engine.begin() as conn:
            yield conn

    def execute(self, statement: str, params: Optional[dict] = None) -> int:
        """Run one raw statement in its own committed transaction; returns rowcount"""
        with self.engine.begin() as conn:
            result = conn.execute(text(statement), params or {})
            return result.rowcount

    def scalar(self, statement: str, params: Optional[dict] = None):
        with self.engine.connect() as conn:
            return conn.execute(text(statement), params or {}).scalar()

    def ping(self) -> bool:
        try:
            return self.scalar("SELECT 1") == 1
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")
