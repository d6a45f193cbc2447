#!/usr/bin/env python3
"""
Move CVA Descriptive assessment columns to their current layout.

Runs in a single transaction unless SCHEMA_MIGRATION_TRANSACTIONAL=false.
Take a database backup first: there is no rollback.

Usage: python scripts/migrate_cva_descriptive_fields.py [migrate|rollback]
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.migration_cli import run_cva_migration_cli

if __name__ == "__main__":
    sys.exit(run_cva_migration_cli())
