"""
Tests for the HTTP surface.

Dependencies are overridden so no database is needed:
- health endpoints
- migration domain listing and dry-run analysis
- JSON error envelopes for unknown domains and missing configuration
"""

from unittest.mock import MagicMock

import pytest

from api.dependencies import get_client, get_migration_service
from main import app
from services.migration_service import FieldMigrationService
from test_fixtures import InMemoryRecipeRepository, client, make_recipe_row


@pytest.fixture
def override_dependencies():
    """Clear dependency overrides after each test"""
    yield app.dependency_overrides
    app.dependency_overrides.clear()


def test_health_check():
    response = client.get("/health-check")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "Coffee Tracker"}
    assert "X-Request-ID" in response.headers


def test_database_health(override_dependencies):
    """
    Verifies:
    - /health/db reports the ping result of the injected client
    """
    fake_client = MagicMock()
    fake_client.ping.return_value = True
    override_dependencies[get_client] = lambda: fake_client

    response = client.get("/health/db")

    assert response.status_code == 200
    assert response.json() == {"database": "ok", "reachable": True}

    fake_client.ping.return_value = False
    assert client.get("/health/db").json()["reachable"] is False


def test_database_health_without_configuration():
    """
    Verifies:
    - Without a configured client the route answers 503 in the error envelope
    """
    response = client.get("/health/db")
    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "HTTP_503"
    assert "timestamp" in body


def test_list_migration_domains():
    response = client.get("/migrations/domains")
    assert response.status_code == 200
    columns = {item["domain"]: item["column"] for item in response.json()}
    assert columns["grinderSetting"] == "grinder_unit"
    assert columns["filteringTool"] == "filtering_tools"
    assert len(columns) == 6


def test_migration_analysis(override_dependencies):
    """
    Verifies:
    - The dry-run analysis is returned as JSON
    - No rows are modified
    """
    repo = InMemoryRecipeRepository(
        [
            make_recipe_row("processing_method", "wet process", offset_minutes=0),
            make_recipe_row("processing_method", "Mystery process", offset_minutes=1),
        ]
    )
    override_dependencies[get_migration_service] = lambda: FieldMigrationService(repo)

    response = client.get("/migrations/processingMethod/analysis")

    assert response.status_code == 200
    body = response.json()
    assert body["domain"] == "processingMethod"
    assert body["can_migrate"] == ['"wet process" → "Washed"']
    assert body["cannot_migrate"] == ["Mystery process"]
    assert body["summary"] == {"Washed": 1}
    assert repo.updates == []


def test_migration_analysis_unknown_domain(override_dependencies):
    override_dependencies[get_migration_service] = lambda: FieldMigrationService(
        InMemoryRecipeRepository([])
    )

    response = client.get("/migrations/roastLevel/analysis")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "UNKNOWN_MIGRATION_DOMAIN"
