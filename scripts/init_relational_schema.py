#!/usr/bin/env python3
"""
Create the SmartFit tables on a SQL database

Usage:
    python scripts/init_relational_schema.py postgresql://user:pw@localhost/smartfit
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from database.models import create_relational_schema  # noqa: E402


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create SmartFit relational tables")
    parser.add_argument("database_url", help="SQLAlchemy database URL")
    args = parser.parse_args()

    engine = create_relational_schema(args.database_url)
    print(f"✅ Tables created on {engine.url.render_as_string(hide_password=True)}")
