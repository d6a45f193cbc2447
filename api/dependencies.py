"""
API dependencies for dependency injection
"""

from typing import Generator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from adapters.postgres_client import PostgresClient
from domain.models import get_db_session
from repositories.recipe_repository import RecipeRepository
from services.migration_service import FieldMigrationService


def get_client(request: Request) -> PostgresClient:
    """PostgresClient created by the application lifespan"""
    client = getattr(request.app.state, "client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not configured",
        )
    return client


def get_db(client: PostgresClient = Depends(get_client)) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session(client)


def get_recipe_repository(db: Session = Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(db)


def get_migration_service(
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> FieldMigrationService:
    return FieldMigrationService(repository)
