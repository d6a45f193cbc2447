"""
Schema migration service - one-off DDL scripts for the recipes table.

Each script is an ordered list of named steps. With transactional execution
(the default) every statement runs on one connection inside a single
PostgreSQL transaction, so a failing statement leaves the schema exactly as it
was. Without it each statement commits on its own and a failure leaves the
earlier steps applied.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from adapters.postgres_client import PostgresClient
from app.config import settings
from app.exceptions import RollbackNotSupportedError, SchemaMigrationError, ServiceValidationError
from domain.models.recipe import evaluation_system_check_sql
from domain.schemas import SchemaMigrationReport

logger = logging.getLogger("coffeetracker.schema_migration")

Step = Tuple[str, List[str]]

INTENSITY_ATTRIBUTES = ("fragrance", "aroma", "flavor", "aftertaste", "acidity", "sweetness", "mouthfeel")

# (old column, new column) for the descriptor arrays; the old ones are dropped
DESCRIPTOR_ARRAY_MOVES = (
    ("cva_desc_olfactory_descriptors", "cva_desc_fragrance_aroma_descriptors"),
    ("cva_desc_retronasal_descriptors", "cva_desc_flavor_aftertaste_descriptors"),
)

CVA_AUDIT_QUERY = "SELECT COUNT(*) AS count FROM recipes WHERE cva_desc_fragrance IS NOT NULL"


class _SchemaScript(ABC):
    """Shared execution of named DDL steps against a PostgresClient"""

    name = "schema migration"

    def __init__(self, client: PostgresClient, transactional: Optional[bool] = None):
        self.client = client
        self.transactional = (
            settings.schema_migration_transactional if transactional is None else transactional
        )

    @abstractmethod
    def steps(self) -> List[Step]:
        """Named steps, each a list of SQL statements"""

    def statements(self) -> List[str]:
        """Every SQL statement of the script, in execution order"""
        return [statement for _, statements in self.steps() for statement in statements]

    def _run_steps(self, execute: Callable[[str], object]) -> List[str]:
        executed = []
        for step_name, statements in self.steps():
            logger.info(f"{self.name}: {step_name}")
            for statement in statements:
                try:
                    execute(statement)
                except SQLAlchemyError as e:
                    logger.error(f"{self.name} failed during '{step_name}': {e}")
                    raise SchemaMigrationError(
                        f"{self.name} failed during '{step_name}': {e}",
                        details={"step": step_name, "statement": statement},
                        code="SCHEMA_STATEMENT_FAILED",
                    ) from e
            executed.append(step_name)
        return executed

    def _audit(self, scalar: Callable[[str], object]) -> Optional[int]:
        return None

    def run(self) -> SchemaMigrationReport:
        logger.info(f"Starting {self.name} (transactional={self.transactional})")
        if self.transactional:
            with self.client.transaction() as conn:
                executed = self._run_steps(lambda sql: conn.execute(text(sql)))
                rows = self._audit(lambda sql: conn.execute(text(sql)).scalar())
        else:
            executed = self._run_steps(self.client.execute)
            rows = self._audit(self.client.scalar)

        logger.info(f"{self.name} completed successfully")
        return SchemaMigrationReport(
            name=self.name,
            transactional=self.transactional,
            steps=executed,
            rows_with_data=rows,
        )

    def rollback(self) -> None:
        logger.warning(f"Rollback requested for {self.name}; not supported")
        raise RollbackNotSupportedError()


class CVADescriptiveMigration(_SchemaScript):
    """
    Moves CVA Descriptive columns to their final layout: *_intensity columns
    become unsuffixed 0-15 integers, olfactory/retronasal arrays become the
    fragrance-aroma and flavor-aftertaste arrays, free text and assessment
    metadata columns are added, and the affective score check allows 0-100.

    Descriptor arrays are copied over, not merged with existing values.
    """

    name = "CVA Descriptive Assessment migration"

    def steps(self) -> List[Step]:
        add_columns = [
            f"ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_{attr}_new INTEGER "
            f"CHECK (cva_desc_{attr}_new >= 0 AND cva_desc_{attr}_new <= 15)"
            for attr in INTENSITY_ATTRIBUTES
        ]
        add_columns += [
            f"ALTER TABLE recipes ADD COLUMN IF NOT EXISTS {new} JSONB DEFAULT '[]'"
            for _, new in DESCRIPTOR_ARRAY_MOVES
        ]
        add_columns += [
            "ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_acidity_descriptors TEXT",
            "ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_sweetness_descriptors TEXT",
            "ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_additional_notes TEXT",
            "ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_roast_level VARCHAR(100)",
            "ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_assessment_date TIMESTAMP",
            "ALTER TABLE recipes ADD COLUMN IF NOT EXISTS cva_desc_assessor_id VARCHAR(100)",
        ]

        copy_data = [
            f"UPDATE recipes SET cva_desc_{attr}_new = cva_desc_{attr}_intensity "
            f"WHERE cva_desc_{attr}_intensity IS NOT NULL"
            for attr in INTENSITY_ATTRIBUTES
        ]
        copy_data += [
            f"UPDATE recipes SET {new} = {old} WHERE {old} IS NOT NULL AND {old} != '[]'"
            for old, new in DESCRIPTOR_ARRAY_MOVES
        ]

        drop_columns = [
            f"ALTER TABLE recipes DROP COLUMN IF EXISTS cva_desc_{attr}_intensity"
            for attr in INTENSITY_ATTRIBUTES
        ]
        drop_columns += [
            f"ALTER TABLE recipes DROP COLUMN IF EXISTS {old}" for old, _ in DESCRIPTOR_ARRAY_MOVES
        ]

        rename_columns = [
            f"ALTER TABLE recipes RENAME COLUMN cva_desc_{attr}_new TO cva_desc_{attr}"
            for attr in INTENSITY_ATTRIBUTES
        ]

        score_constraint = [
            "ALTER TABLE recipes DROP CONSTRAINT IF EXISTS recipes_cva_aff_score_check",
            "ALTER TABLE recipes ADD CONSTRAINT recipes_cva_aff_score_check "
            "CHECK (cva_aff_score >= 0 AND cva_aff_score <= 100)",
        ]

        return [
            ("Adding new CVA Descriptive columns", add_columns),
            ("Migrating existing CVA data", copy_data),
            ("Removing old CVA columns", drop_columns),
            ("Renaming columns to final names", rename_columns),
            ("Updating CVA Affective score constraint", score_constraint),
        ]

    def _audit(self, scalar: Callable[[str], object]) -> Optional[int]:
        try:
            count = scalar(CVA_AUDIT_QUERY)
        except SQLAlchemyError as e:
            raise SchemaMigrationError(
                f"{self.name} audit query failed: {e}",
                details={"statement": CVA_AUDIT_QUERY},
                code="SCHEMA_STATEMENT_FAILED",
            ) from e
        count = int(count or 0)
        logger.info(f"Migrated CVA data for {count} recipes")
        return count


class EvaluationSystemConstraintMigration(_SchemaScript):
    """
    Re-creates recipes_evaluation_system_check for the configured allow-list.

    Always transactional: between the drop and the add the column would
    accept any value.
    """

    name = "Evaluation system constraint migration"

    def __init__(self, client: PostgresClient, allowed_values: Optional[Iterable[str]] = None):
        super().__init__(client, transactional=True)
        values = list(settings.evaluation_systems if allowed_values is None else allowed_values)
        if not values:
            raise ServiceValidationError(
                "At least one evaluation system is required", code="EMPTY_ALLOW_LIST"
            )
        if any(not isinstance(value, str) or not value.strip() for value in values):
            raise ServiceValidationError(
                "Evaluation system values must be non-empty strings", code="INVALID_ALLOW_LIST"
            )
        duplicates = sorted({value for value in values if values.count(value) > 1})
        if duplicates:
            raise ServiceValidationError(
                f"Duplicate evaluation system values: {', '.join(duplicates)}",
                details={"duplicates": duplicates},
                code="INVALID_ALLOW_LIST",
            )
        self.allowed_values: Sequence[str] = tuple(values)

    def steps(self) -> List[Step]:
        return [
            (
                "Replacing evaluation_system check constraint",
                [
                    "ALTER TABLE recipes DROP CONSTRAINT IF EXISTS recipes_evaluation_system_check",
                    "ALTER TABLE recipes ADD CONSTRAINT recipes_evaluation_system_check "
                    f"CHECK ({evaluation_system_check_sql(self.allowed_values)})",
                ],
            )
        ]

    def describe(self) -> str:
        """SQL that run() would execute"""
        return "\n".join(f"{statement};" for statement in self.statements())
