"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.migration_schemas import (
    MigrationResult,
    MigrationAnalysis,
    MigrationDomainInfo,
    SchemaMigrationReport,
)
from domain.schemas.recipe_schemas import RecipeCreate

__all__ = [
    # Migration schemas
    "MigrationResult",
    "MigrationAnalysis",
    "MigrationDomainInfo",
    "SchemaMigrationReport",
    # Recipe schemas
    "RecipeCreate",
]
