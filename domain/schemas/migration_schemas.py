from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Optional

from domain.enums import MigrationDomain


class MigrationResult(BaseModel):
    """Outcome of one full-table field migration pass"""

    domain: MigrationDomain
    total_recipes: int = 0
    migrated: int = 0
    unchanged: int = 0
    skipped: int = 0
    unmigrated: List[str] = Field(
        default_factory=list,
        description='Values with no canonical mapping, as "<raw> (<id prefix>...)"',
    )
    errors: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_counts(self):
        if self.migrated + len(self.unmigrated) > self.total_recipes:
            raise ValueError("migrated + unmigrated cannot exceed total_recipes")
        return self

    @property
    def success(self) -> bool:
        return not self.errors


class MigrationAnalysis(BaseModel):
    """Dry-run report over the distinct current values of one field"""

    domain: MigrationDomain
    column: str
    can_migrate: List[str] = Field(
        default_factory=list, description='Entries formatted as "raw" → "canonical"'
    )
    cannot_migrate: List[str] = Field(default_factory=list)
    summary: Dict[str, int] = Field(
        default_factory=dict,
        description="Target value -> number of distinct raw values mapping to it",
    )


class MigrationDomainInfo(BaseModel):
    """Migratable field and the column that stores it"""

    domain: MigrationDomain
    column: str
    label: str


class SchemaMigrationReport(BaseModel):
    """Outcome of a schema migration script"""

    name: str
    transactional: bool
    steps: List[str] = Field(default_factory=list)
    rows_with_data: Optional[int] = None
