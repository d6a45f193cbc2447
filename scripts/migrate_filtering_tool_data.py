#!/usr/bin/env python3
"""
Convert free-text filter descriptions to Paper, Metal or Cloth.
Empty values are skipped.

Usage: python scripts/migrate_filtering_tool_data.py [analyze|migrate|rollback]
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.enums import MigrationDomain
from scripts.migration_cli import run_field_migration_cli

if __name__ == "__main__":
    sys.exit(run_field_migration_cli(MigrationDomain.FILTERING_TOOL))
