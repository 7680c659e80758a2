#!/usr/bin/env python3
"""Database initialization script for Wishcard."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import inspect

from wishcard.config import settings
from wishcard.database import init_db, engine, Base


def main():
    """Initialize the database tables and the upload directory."""
    print("Initializing database...")

    # Create all tables
    init_db()

    # Print table info
    print("\nDatabase tables created:")
    for table in Base.metadata.tables:
        print(f"  - {table}")

    # Verify connection
    tables = inspect(engine).get_table_names()
    print(f"\nExisting tables: {tables}")

    settings.upload_path.mkdir(parents=True, exist_ok=True)
    print(f"Upload directory: {settings.upload_path}")

    print("\nDatabase initialization complete!")


if __name__ == "__main__":
    main()
