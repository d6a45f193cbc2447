#!/usr/bin/env python3
"""
Convert grinder settings (stored in grinder_unit) to integer clicks 1-40.
Descriptions like "medium fine" map to a typical click count; unreadable
values fall back to the default setting 20.

Usage: python scripts/migrate_grinder_setting_data.py [analyze|migrate|rollback]
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.enums import MigrationDomain
from scripts.migration_cli import run_field_migration_cli

if __name__ == "__main__":
    sys.exit(run_field_migration_cli(MigrationDomain.GRINDER_SETTING))
