"""Services package - Business logic layer"""

from services.migration_service import FieldMigrationService
from services.schema_migration_service import (
    CVADescriptiveMigration,
    EvaluationSystemConstraintMigration,
)
from services.recipe_service import RecipeService

# Note: value_normalizer contains pure functions, not a class

__all__ = [
    "FieldMigrationService",
    "CVADescriptiveMigration",
    "EvaluationSystemConstraintMigration",
    "RecipeService",
]
