"""
Pytest configuration.

Puts the project root on sys.path and pins the environment before any
application module reads settings: tests never pick up a real DATABASE_URL,
and the PostgreSQL scenario test uses TEST_DATABASE_URL instead.
"""

import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ["ENVIRONMENT"] = "testing"
os.environ.pop("DATABASE_URL", None)
