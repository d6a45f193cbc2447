"""Read-only migration reports"""

from typing import List

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_migration_service
from app.exceptions import NotFoundError
from domain.enums import MigrationDomain
from domain.schemas import MigrationAnalysis, MigrationDomainInfo
from services.migration_service import FieldMigrationService

router = APIRouter(prefix="/migrations", tags=["Migrations"])
logger = logging.getLogger("coffeetracker.api.migrations")


def _resolve_domain(domain: str) -> MigrationDomain:
    try:
        return MigrationDomain(domain)
    except ValueError:
        raise NotFoundError(
            f"Unknown migration domain '{domain}'",
            details={"available": [d.value for d in MigrationDomain]},
            code="UNKNOWN_MIGRATION_DOMAIN",
        )


@router.get("/domains", response_model=List[MigrationDomainInfo])
def list_domains():
    """Fields that have a legacy value migration"""
    return [
        MigrationDomainInfo(domain=domain, column=domain.column, label=domain.label)
        for domain in MigrationDomain
    ]


@router.get("/{domain}/analysis", response_model=MigrationAnalysis)
def analyze_domain(
    migration_domain: MigrationDomain = Depends(_resolve_domain),
    service: FieldMigrationService = Depends(get_migration_service),
):
    """Dry run of a field migration; nothing is written"""
    logger.info(f"Dry-run analysis requested for {migration_domain.value}")
    return service.analyze(migration_domain)
