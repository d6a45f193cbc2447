"""Adapters package - external system clients"""

from adapters.postgres_client import PostgresClient

__all__ = ["PostgresClient"]
