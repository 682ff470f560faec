#!/usr/bin/env python3
"""
Database management script for the task service.
Creates and drops the task tables from the ORM metadata.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import inspect

from task_api.config import settings
from task_api.infrastructure.db.database import engine, create_tables, drop_tables


def create_database():
    """Create any missing tables."""
    print(f"Creating tables in {settings.database_url}...")
    create_tables()
    show_tables()


def drop_database(confirmed: bool = False):
    """Drop all task tables - WARNING: This will drop all data!"""
    if not confirmed:
        response = input("This will drop ALL task data. Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("Drop cancelled.")
            return False
    print("Dropping tables...")
    drop_tables()
    return True


def reset_database(confirmed: bool = False):
    """Drop and recreate all task tables."""
    if drop_database(confirmed):
        create_database()


def show_tables():
    """List the tables currently present."""
    tables = inspect(engine).get_table_names()
    print("Tables: " + (", ".join(tables) if tables else "(none)"))


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command] [--yes]")
        print("Commands:")
        print("  create         - Create missing tables")
        print("  drop           - Drop all tables (WARNING: drops all data)")
        print("  reset          - Drop and recreate all tables")
        print("  tables         - List existing tables")
        return

    command_name = sys.argv[1]
    confirmed = "--yes" in sys.argv[2:]

    if command_name == "create":
        create_database()
    elif command_name == "drop":
        drop_database(confirmed)
    elif command_name == "reset":
        reset_database(confirmed)
    elif command_name == "tables":
        show_tables()
    else:
        print(f"Unknown command: {command_name}")
        sys.exit(1)


if __name__ == "__main__":
    main()
