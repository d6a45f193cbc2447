#!/usr/bin/env python3
"""
Convert free-text processing methods to the standard categories
("wet process" -> "Washed", "giling basah" -> "Semi-Washed").
Unrecognized methods are reported for manual review.

Usage: python scripts/migrate_processing_method_data.py [analyze|migrate|rollback]
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.enums import MigrationDomain
from scripts.migration_cli import run_field_migration_cli

if __name__ == "__main__":
    sys.exit(run_field_migration_cli(MigrationDomain.PROCESSING_METHOD))
