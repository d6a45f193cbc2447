"""
Recipe Repository - field-level data access used by the migration passes
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.exceptions import ServiceValidationError
from domain.enums import MIGRATION_COLUMNS
from domain.models import Recipe
from repositories.base import BaseRepository

logger = logging.getLogger("coffeetracker.repositories.recipe")

# Columns the field-level read/update helpers may touch
READABLE_COLUMNS = frozenset(
    {"recipe_id", "recipe_name", "date_created", "date_modified", *MIGRATION_COLUMNS.values()}
)
WRITABLE_COLUMNS = frozenset(MIGRATION_COLUMNS.values())


def _column(name: str, allowed: Iterable[str]):
    if name not in allowed:
        raise ServiceValidationError(
            f"Column '{name}' is not available for field migration",
            details={"column": name},
            code="INVALID_COLUMN",
        )
    return getattr(Recipe, name)


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def get_by_id(self, recipe_id: UUID) -> Optional[Recipe]:
        """Get recipe by ID"""
        return self.db.query(Recipe).filter(Recipe.recipe_id == recipe_id).first()

    def read_all(self, fields: List[str], order_by: str = "date_created") -> List[Dict[str, Any]]:
        """Read the given columns of every recipe, ascending by order_by"""
        columns = [_column(field, READABLE_COLUMNS) for field in fields]
        order_column = _column(order_by, READABLE_COLUMNS)
        rows = self.db.execute(select(*columns).order_by(order_column.asc())).all()
        return [dict(zip(fields, row)) for row in rows]

    def read_distinct(self, field: str) -> List[Any]:
        """Distinct current values of one column, ordered by value"""
        column = _column(field, WRITABLE_COLUMNS)
        rows = self.db.execute(select(column).distinct().order_by(column)).all()
        return [row[0] for row in rows]

    def update_field(self, recipe_id: UUID, field: str, value: Any) -> int:
        """
        Write one column of one recipe and touch date_modified.

        Returns the number of rows updated. On failure the session is rolled
        back and the database error is re-raised to the caller.
        """
        column = _column(field, WRITABLE_COLUMNS)
        statement = (
            update(Recipe)
            .where(Recipe.recipe_id == recipe_id)
            .values({column: value, Recipe.date_modified: datetime.now(timezone.utc)})
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return result.rowcount

    def count(self, field: Optional[str] = None) -> int:
        """Count all recipes, or only those where field is not null"""
        query = select(func.count()).select_from(Recipe)
        if field is not None:
            query = query.where(_column(field, READABLE_COLUMNS).isnot(None))
        return self.db.execute(query).scalar_one()
