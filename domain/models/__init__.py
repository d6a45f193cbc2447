"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    JSONList,
    init_database,
    get_db_session,
)
from domain.models.recipe import Recipe, evaluation_system_check_sql
from domain.models.collection import Collection, RecipeCollection

__all__ = [
    # Database
    "Base",
    "JSONList",
    "init_database",
    "get_db_session",
    # Recipe models
    "Recipe",
    "evaluation_system_check_sql",
    # Collection models
    "Collection",
    "RecipeCollection",
]
