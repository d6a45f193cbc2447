#!/usr/bin/env python3
"""
Re-create recipes_evaluation_system_check so it accepts every value in
EVALUATION_SYSTEMS (for example after adding quick-tasting).

Usage: python scripts/migrate_evaluation_system_constraint.py [describe|migrate|rollback]
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.migration_cli import run_constraint_migration_cli

if __name__ == "__main__":
    sys.exit(run_constraint_migration_cli())
