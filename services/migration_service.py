"""
Field migration service - full-table passes that rewrite legacy free-text
recipe values to their canonical form.
"""

import logging
from typing import Any, Dict, List

from app.exceptions import RollbackNotSupportedError
from domain.enums import MigrationDomain
from domain.schemas import MigrationAnalysis, MigrationResult
from repositories.recipe_repository import RecipeRepository
from services import value_normalizer

logger = logging.getLogger("coffeetracker.migration")


def _short_id(recipe_id: Any) -> str:
    return f"{str(recipe_id)[:8]}..."


class FieldMigrationService:
    """
    Drives migrate / analyze / rollback for one recipe field at a time.

    The repository is injected; anything with read_all, read_distinct and
    update_field works (tests use an in-memory fake).
    """

    def __init__(self, repository: RecipeRepository):
        self.repository = repository

    def migrate_field(self, domain: MigrationDomain) -> MigrationResult:
        """
        Normalize the field on every recipe, oldest first.

        Rows already holding their canonical value are left untouched, so a
        second run reports zero migrations. A failed write is recorded and the
        pass continues; a failure reading the rows propagates.
        """
        domain = MigrationDomain(domain)
        column = domain.column
        logger.info(f"Starting recipe {domain.label} migration")

        rows = self.repository.read_all(["recipe_id", column], order_by="date_created")
        logger.info(f"Found {len(rows)} recipes to process")

        migrated = unchanged = skipped = 0
        unmigrated: List[str] = []
        errors: List[str] = []

        for row in rows:
            recipe_id = row["recipe_id"]
            raw = row[column]

            if domain in value_normalizer.SKIP_BLANK_DOMAINS and value_normalizer.is_blank(raw):
                skipped += 1
                continue

            normalized = value_normalizer.normalize(domain, raw)
            if normalized is None or not value_normalizer.is_canonical(domain, normalized):
                unmigrated.append(f"{raw} ({_short_id(recipe_id)})")
                logger.warning(f'Could not migrate: "{raw}" ({_short_id(recipe_id)})')
                continue

            if normalized == raw:
                unchanged += 1
                continue

            try:
                self.repository.update_field(recipe_id, column, normalized)
            except Exception as e:
                message = f"Failed to migrate recipe {recipe_id}: {e}"
                errors.append(message)
                logger.error(message)
                continue

            migrated += 1
            logger.info(f'Migrated: "{raw}" -> "{normalized}" ({_short_id(recipe_id)})')

        result = MigrationResult(
            domain=domain,
            total_recipes=len(rows),
            migrated=migrated,
            unchanged=unchanged,
            skipped=skipped,
            unmigrated=unmigrated,
            errors=errors,
        )
        logger.info(
            f"{domain.label} migration finished: {result.migrated} migrated, "
            f"{len(result.unmigrated)} unmigrated, {len(result.errors)} errors"
        )
        return result

    def analyze(self, domain: MigrationDomain) -> MigrationAnalysis:
        """
        Dry run over the distinct current values of the field. Nothing is written.

        Counts in the summary are per distinct raw value, not per recipe.
        """
        domain = MigrationDomain(domain)
        logger.info(f"Analyzing {domain.label} migration possibilities")

        can_migrate: List[str] = []
        cannot_migrate: List[str] = []
        summary: Dict[str, int] = {}

        for raw in self.repository.read_distinct(domain.column):
            if domain in value_normalizer.SKIP_BLANK_DOMAINS and value_normalizer.is_blank(raw):
                continue
            normalized = value_normalizer.normalize(domain, raw)
            if normalized is None or not value_normalizer.is_canonical(domain, normalized):
                cannot_migrate.append(str(raw) if raw is not None else "")
                continue
            can_migrate.append(f'"{raw}" → "{normalized}"')
            target = str(normalized)
            summary[target] = summary.get(target, 0) + 1

        return MigrationAnalysis(
            domain=domain,
            column=domain.column,
            can_migrate=can_migrate,
            cannot_migrate=cannot_migrate,
            summary=summary,
        )

    def rollback(self, domain: MigrationDomain) -> None:
        """Migrations keep no record of previous values; restore from a backup instead"""
        logger.warning(f"Rollback requested for {MigrationDomain(domain).label}; not supported")
        raise RollbackNotSupportedError()


# =============================================================================
# Console reports
# =============================================================================


def format_migration_result(result: MigrationResult) -> str:
    """Human-readable summary of a migration pass"""
    label = result.domain.label
    lines = [
        f"Migration Summary ({label})",
        f"   Total recipes: {result.total_recipes}",
        f"   Successfully migrated: {result.migrated}",
        f"   Already canonical: {result.unchanged}",
        f"   Skipped (empty): {result.skipped}",
        f"   Could not migrate: {len(result.unmigrated)}",
        f"   Errors: {len(result.errors)}",
    ]
    if result.unmigrated:
        lines.append("")
        lines.append(f"Unmigrated {label} values:")
        lines.extend(f"   - {entry}" for entry in result.unmigrated)
        lines.append("These values need manual review or mapping updates")
    if result.errors:
        lines.append("")
        lines.append("Errors encountered:")
        lines.extend(f"   - {error}" for error in result.errors)
    return "\n".join(lines)


def format_analysis(analysis: MigrationAnalysis) -> str:
    """Human-readable dry-run report, target distribution sorted by count"""
    label = analysis.domain.label
    lines = [
        f"Migration Analysis ({label})",
        f"   Can migrate: {len(analysis.can_migrate)} values",
        f"   Cannot migrate: {len(analysis.cannot_migrate)} values",
    ]
    if analysis.can_migrate:
        lines.append("")
        lines.append("Can migrate:")
        lines.extend(f"   {mapping}" for mapping in analysis.can_migrate)
    if analysis.cannot_migrate:
        lines.append("")
        lines.append("Cannot migrate:")
        lines.extend(f'   "{value}"' for value in analysis.cannot_migrate)
    if analysis.summary:
        lines.append("")
        lines.append("Target distribution:")
        for target, count in sorted(analysis.summary.items(), key=lambda item: item[1], reverse=True):
            lines.append(f"   {target}: {count} values")
    return "\n".join(lines)
