#!/usr/bin/env python3
"""
Create the recipe tracker tables (recipes, collections, recipe_collections)
in the database named by DATABASE_URL. Existing tables are left as they are.
"""

import sys
import logging
from pathlib import Path

from sqlalchemy import inspect

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapters.postgres_client import PostgresClient
from app.config import settings
from app.exceptions import ConfigurationError
from domain.models.database import init_database

logger = logging.getLogger("coffeetracker.init_db")


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
    try:
        client = PostgresClient.from_settings(settings)
    except ConfigurationError as e:
        logger.error(f"✗ {e}")
        return 1

    try:
        init_database(client.engine)
        tables = inspect(client.engine).get_table_names()
        logger.info(f"✓ Database has {len(tables)} tables: {', '.join(sorted(tables))}")
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print(f"{settings.app_name} Database Initialization")
    print("=" * 60 + "\n")

    exit_code = main()

    print("\n" + "=" * 60)
    print("SUCCESS! Your database is ready to use." if exit_code == 0 else "FAILED! Check the errors above.")
    print("=" * 60 + "\n")

    sys.exit(exit_code)
