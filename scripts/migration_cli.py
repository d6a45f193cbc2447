#!/usr/bin/env python3
"""
Operator command line for recipe data and schema migrations.

Usage:
    python -m scripts.migration_cli <domain> [analyze|migrate|rollback]

    domain: origin, processingMethod, grinderModel, grinderSetting,
            filteringTool, waterTemperature

The per-domain scripts in this directory call the same functions with the
domain fixed. DATABASE_URL must be set (environment or .env).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapters.postgres_client import PostgresClient
from app.config import settings
from app.exceptions import ConfigurationError, RollbackNotSupportedError
from domain.enums import MigrationDomain
from repositories.recipe_repository import RecipeRepository
from services.migration_service import (
    FieldMigrationService,
    format_analysis,
    format_migration_result,
)
from services.schema_migration_service import (
    CVADescriptiveMigration,
    EvaluationSystemConstraintMigration,
)

logger = logging.getLogger("coffeetracker.cli")

ClientFactory = Callable[[], PostgresClient]

FIELD_COMMANDS = ("analyze", "migrate", "rollback")
FIELD_COMMAND_HELP = {
    "analyze": "Show what would be migrated without making changes",
    "migrate": "Perform the actual migration",
    "rollback": "Rollback migration (requires backup)",
}


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )


def _default_client() -> PostgresClient:
    return PostgresClient.from_settings(settings)


def _banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def _command_parser(prog: str, description: str, commands, help_by_command) -> argparse.ArgumentParser:
    epilog = "\n".join(f"  {name:<9} - {help_by_command[name]}" for name in commands)
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", choices=commands)
    return parser


def _open_client(client_factory: ClientFactory) -> Optional[PostgresClient]:
    """Client from the factory, or None after reporting missing configuration"""
    try:
        return client_factory()
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"Configuration error: {e}")
        print("Set DATABASE_URL in the environment or in .env and try again.")
        return None


def _run_rollback(rollback: Callable[[], None]) -> int:
    try:
        rollback()
    except RollbackNotSupportedError as e:
        print(f"Rollback failed: {e}")
        print("To rollback, restore from a database backup taken before the migration.")
        return 1
    return 0


# =============================================================================
# Field migrations
# =============================================================================


def run_field_command(service: FieldMigrationService, domain: MigrationDomain, command: str) -> int:
    """Run one subcommand against a ready service; returns the exit code"""
    if command == "analyze":
        print(format_analysis(service.analyze(domain)))
        return 0
    if command == "migrate":
        result = service.migrate_field(domain)
        print(format_migration_result(result))
        print(f"\n{domain.label.capitalize()} migration completed!")
        return 0
    return _run_rollback(lambda: service.rollback(domain))


def run_field_migration_cli(
    domain: MigrationDomain,
    argv: Optional[List[str]] = None,
    client_factory: ClientFactory = _default_client,
    repository_factory=RecipeRepository,
) -> int:
    """Entry point shared by the per-domain migration scripts"""
    domain = MigrationDomain(domain)
    parser = _command_parser(
        prog=f"migrate_{domain.column}",
        description=f"Normalize recipe {domain.label} values to the canonical vocabulary.",
        commands=FIELD_COMMANDS,
        help_by_command=FIELD_COMMAND_HELP,
    )
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "rollback":
        return run_field_command(FieldMigrationService(repository=None), domain, "rollback")

    client = _open_client(client_factory)
    if client is None:
        return 1

    _banner(f"Recipe {domain.label} migration: {args.command}")
    session = client.session()
    try:
        service = FieldMigrationService(repository_factory(session))
        return run_field_command(service, domain, args.command)
    finally:
        session.close()
        client.close()


# =============================================================================
# Schema migrations
# =============================================================================


def run_cva_migration_cli(argv: Optional[List[str]] = None, client_factory: ClientFactory = _default_client) -> int:
    """Entry point for the CVA Descriptive column migration"""
    parser = _command_parser(
        prog="migrate_cva_descriptive_fields",
        description="Move CVA Descriptive assessment columns to their current layout.",
        commands=("migrate", "rollback"),
        help_by_command=FIELD_COMMAND_HELP,
    )
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "rollback":
        return _run_rollback(CVADescriptiveMigration(client=None).rollback)

    client = _open_client(client_factory)
    if client is None:
        return 1

    _banner("CVA Descriptive Assessment migration")
    try:
        report = CVADescriptiveMigration(client).run()
    finally:
        client.close()

    print(f"Executed steps ({'single transaction' if report.transactional else 'per statement'}):")
    for step in report.steps:
        print(f"   - {step}")
    print(f"Migrated CVA data for {report.rows_with_data} recipes")
    return 0


def run_constraint_migration_cli(
    argv: Optional[List[str]] = None,
    client_factory: ClientFactory = _default_client,
    allowed_values: Optional[List[str]] = None,
) -> int:
    """Entry point for re-creating the evaluation_system check constraint"""
    parser = _command_parser(
        prog="migrate_evaluation_system_constraint",
        description="Re-create recipes_evaluation_system_check from EVALUATION_SYSTEMS.",
        commands=("describe", "migrate", "rollback"),
        help_by_command={**FIELD_COMMAND_HELP, "describe": "Print the SQL without running it"},
    )
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "rollback":
        return _run_rollback(
            EvaluationSystemConstraintMigration(client=None, allowed_values=allowed_values).rollback
        )

    if args.command == "describe":
        print(EvaluationSystemConstraintMigration(client=None, allowed_values=allowed_values).describe())
        return 0

    client = _open_client(client_factory)
    if client is None:
        return 1

    _banner("Evaluation system constraint migration")
    try:
        migration = EvaluationSystemConstraintMigration(client, allowed_values=allowed_values)
        migration.run()
    finally:
        client.close()

    print(f"Allowed evaluation systems: {', '.join(migration.allowed_values)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="migration_cli",
        description="Normalize legacy recipe field values.",
    )
    parser.add_argument("domain", choices=[domain.value for domain in MigrationDomain])
    parser.add_argument("command", choices=FIELD_COMMANDS)
    args = parser.parse_args(argv)
    return run_field_migration_cli(MigrationDomain(args.domain), [args.command])


if __name__ == "__main__":
    sys.exit(main())
