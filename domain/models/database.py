"""
Database declarative base, portable column types and session helpers.

The engine itself is owned by adapters.postgres_client.PostgresClient, which
the process entry point constructs once and passes to whoever needs it.
"""

import logging
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

logger = logging.getLogger("coffeetracker.database")

# Create SQLAlchemy Base
Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


def init_database(engine):
    """Create any missing tables for the registered models"""
    # Import models so they are registered on Base.metadata
    from domain.models import recipe, collection  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def get_db_session(client):
    """Yield a session from the given client (for FastAPI dependency injection)"""
    db = client.session()
    try:
        yield db
    finally:
        db.close()
