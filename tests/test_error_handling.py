"""
Error handling and configuration tests.

This test suite covers:
- Application exception shapes (message, details, code, to_dict)
- Settings loading and the required DATABASE_URL
- JSON error envelopes produced by the exception handlers
- PostgresClient construction from settings
"""

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient

from adapters.postgres_client import PostgresClient
from app.config import DEFAULT_EVALUATION_SYSTEMS, Environment, Settings
from app.exceptions import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    RollbackNotSupportedError,
    SchemaMigrationError,
    ServiceValidationError,
)
from main import app


# =============================================================================
# EXCEPTIONS
# =============================================================================


def test_exception_defaults_and_to_dict():
    """
    Verifies:
    - Default messages apply when none is given
    - to_dict() includes code and details only when present
    - HTTP status hints for the API-facing errors
    """
    error = ServiceValidationError("Bad column", details={"column": "x"}, code="INVALID_COLUMN")
    assert str(error) == "Bad column"
    assert error.to_dict() == {"message": "Bad column", "code": "INVALID_COLUMN", "details": {"column": "x"}}
    assert NotFoundError().to_dict() == {"message": "Not found"}

    assert ServiceValidationError.http_status == 400
    assert NotFoundError.http_status == 404
    assert ConflictError.http_status == 409
    assert str(RollbackNotSupportedError()) == "Rollback not implemented - restore from backup"
    assert str(SchemaMigrationError()) == "Schema migration failed"


# =============================================================================
# CONFIGURATION
# =============================================================================


def test_settings_defaults(monkeypatch):
    """
    Verifies:
    - Schema migrations are transactional by default
    - The evaluation system allow-list has the five known systems
    - A blank DATABASE_URL counts as unset
    """
    monkeypatch.setenv("DATABASE_URL", "   ")
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    settings = Settings(_env_file=None)

    assert settings.database_url is None
    assert settings.schema_migration_transactional is True
    assert settings.evaluation_systems == DEFAULT_EVALUATION_SYSTEMS
    assert settings.is_development()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "TESTING")
    monkeypatch.setenv("SCHEMA_MIGRATION_TRANSACTIONAL", "false")
    monkeypatch.setenv("EVALUATION_SYSTEMS", '["legacy", "quick-tasting"]')
    settings = Settings(_env_file=None)

    assert settings.environment == Environment.TESTING
    assert settings.is_testing()
    assert settings.schema_migration_transactional is False
    assert settings.evaluation_systems == ["legacy", "quick-tasting"]


def test_require_database_url(monkeypatch):
    """
    Verifies:
    - Missing DATABASE_URL raises ConfigurationError with a code
    - A configured URL is returned and used by PostgresClient.from_settings
    """
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    with pytest.raises(ConfigurationError) as exc_info:
        settings.require_database_url()
    assert exc_info.value.code == "MISSING_DATABASE_URL"
    with pytest.raises(ConfigurationError):
        PostgresClient.from_settings(settings)

    configured = Settings(_env_file=None, database_url="sqlite://")
    pg_client = PostgresClient.from_settings(configured)
    try:
        assert pg_client.ping()
    finally:
        pg_client.close()


# =============================================================================
# ERROR ENVELOPES
# =============================================================================

_failing = APIRouter()


@_failing.get("/_test/validation")
def _raise_validation():
    raise ServiceValidationError("Column is not migratable", code="INVALID_COLUMN")


@_failing.get("/_test/conflict")
def _raise_conflict():
    raise ConflictError("Collection 'Favorites' already exists")


@_failing.get("/_test/crash")
def _raise_unexpected():
    raise RuntimeError("boom")


app.include_router(_failing)
_client = TestClient(app, raise_server_exceptions=False)


def test_service_errors_use_json_envelope():
    """
    Verifies:
    - Application errors map to their HTTP status and error code
    - Unexpected errors become a generic 500 without internal details
    """
    response = _client.get("/_test/validation")
    assert response.status_code == 400
    assert response.json()["error"] == {"code": "INVALID_COLUMN", "message": "Column is not migratable"}

    response = _client.get("/_test/conflict")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"

    response = _client.get("/_test/crash")
    assert response.status_code == 500
    assert response.json()["error"]["message"] == "An unexpected error occurred"
    assert "boom" not in response.text
