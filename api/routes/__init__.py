"""API routes package"""

from . import health, migrations

__all__ = ["health", "migrations"]
