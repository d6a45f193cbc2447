"""
Tests for the migration command line.

Clients and repositories are injected, so no database is needed:
- analyze / migrate print reports and exit 0
- rollback prints the fixed explanation and exits 1
- missing DATABASE_URL exits 1 with a message
- schema scripts run through RecordingClient; failures propagate
"""

from unittest.mock import MagicMock

import pytest

from app.exceptions import ConfigurationError, SchemaMigrationError
from domain.enums import MigrationDomain
from scripts import migration_cli
from test_fixtures import InMemoryRecipeRepository, RecordingClient, make_recipe_row


def _origin_repository():
    rows = [
        make_recipe_row("origin", "Brazilian", offset_minutes=0),
        make_recipe_row("origin", "Atlantis", offset_minutes=1),
    ]
    return InMemoryRecipeRepository(rows)


def _missing_config():
    raise ConfigurationError("Missing database configuration: set DATABASE_URL")


# =============================================================================
# FIELD MIGRATIONS
# =============================================================================


def test_field_migrate_prints_summary(capsys):
    """
    Verifies:
    - migrate writes through the injected repository
    - The summary is printed and the exit code is 0
    - The client is closed afterwards
    """
    repo = _origin_repository()
    client = RecordingClient()

    exit_code = migration_cli.run_field_migration_cli(
        MigrationDomain.ORIGIN,
        ["migrate"],
        client_factory=lambda: client,
        repository_factory=lambda session: repo,
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Successfully migrated: 1" in out
    assert "Could not migrate: 1" in out
    assert repo.values("origin") == ["Brazil", "Atlantis"]
    assert client.closed


def test_field_analyze_does_not_write(capsys):
    repo = _origin_repository()

    exit_code = migration_cli.run_field_migration_cli(
        MigrationDomain.ORIGIN,
        ["analyze"],
        client_factory=RecordingClient,
        repository_factory=lambda session: repo,
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert '"Brazilian" → "Brazil"' in out
    assert repo.updates == []


def test_field_rollback_exits_1_without_database(capsys):
    """
    Verifies:
    - rollback never opens a database connection
    - The fixed explanation is printed and the exit code is 1
    """
    factory = MagicMock()

    exit_code = migration_cli.run_field_migration_cli(
        MigrationDomain.GRINDER_MODEL, ["rollback"], client_factory=factory
    )

    assert exit_code == 1
    assert "Rollback not implemented - restore from backup" in capsys.readouterr().out
    factory.assert_not_called()


def test_missing_database_url_exits_1(capsys):
    exit_code = migration_cli.run_field_migration_cli(
        MigrationDomain.ORIGIN, ["migrate"], client_factory=_missing_config
    )
    assert exit_code == 1
    assert "DATABASE_URL" in capsys.readouterr().out


def test_unknown_command_is_a_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        migration_cli.run_field_migration_cli(MigrationDomain.ORIGIN, ["explode"])
    assert exc_info.value.code == 2


def test_generic_entry_point_dispatches(monkeypatch):
    """
    Verifies:
    - main() parses "<domain> <command>" and forwards to the field runner
    """
    calls = []
    monkeypatch.setattr(
        migration_cli,
        "run_field_migration_cli",
        lambda domain, argv: calls.append((domain, argv)) or 0,
    )

    assert migration_cli.main(["waterTemperature", "analyze"]) == 0
    assert calls == [(MigrationDomain.WATER_TEMPERATURE, ["analyze"])]


# =============================================================================
# SCHEMA MIGRATIONS
# =============================================================================


def test_cva_cli_migrate(capsys):
    client = RecordingClient(audit_count=2)

    exit_code = migration_cli.run_cva_migration_cli(["migrate"], client_factory=lambda: client)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Migrated CVA data for 2 recipes" in out
    assert client.closed


def test_cva_cli_failure_propagates():
    client = RecordingClient(fail_on="RENAME COLUMN")
    with pytest.raises(SchemaMigrationError):
        migration_cli.run_cva_migration_cli(["migrate"], client_factory=lambda: client)
    assert client.closed


def test_cva_cli_rollback_exits_1(capsys):
    assert migration_cli.run_cva_migration_cli(["rollback"], client_factory=_missing_config) == 1
    assert "restore from backup" in capsys.readouterr().out


def test_constraint_cli_describe_and_migrate(capsys):
    """
    Verifies:
    - describe prints the SQL without touching the database
    - migrate runs both statements and lists the allowed values
    """
    exit_code = migration_cli.run_constraint_migration_cli(
        ["describe"], client_factory=_missing_config, allowed_values=["legacy", "quick-tasting"]
    )
    out = capsys.readouterr().out
    assert exit_code == 0
    assert "CHECK (evaluation_system IN ('legacy', 'quick-tasting'))" in out

    client = RecordingClient()
    exit_code = migration_cli.run_constraint_migration_cli(
        ["migrate"], client_factory=lambda: client, allowed_values=["legacy", "quick-tasting"]
    )
    assert exit_code == 0
    assert len(client.committed) == 2
    assert "Allowed evaluation systems: legacy, quick-tasting" in capsys.readouterr().out


def test_constraint_cli_missing_database_url():
    assert migration_cli.run_constraint_migration_cli(["migrate"], client_factory=_missing_config) == 1
