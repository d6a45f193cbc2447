"""Health check and utility routes"""

from fastapi import APIRouter, Depends
import logging

from adapters.postgres_client import PostgresClient
from api.dependencies import get_client
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("coffeetracker.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}


@router.get("/health/db")
def database_health(client: PostgresClient = Depends(get_client)):
    """Run SELECT 1 against the configured database"""
    reachable = client.ping()
    if not reachable:
        logger.warning("Database health check failed")
    return {"database": "ok" if reachable else "unreachable", "reachable": reachable}
