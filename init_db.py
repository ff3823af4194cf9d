#!/usr/bin/env python3
# init_db.py
"""
Database initialization script.

Creates every table without going through Alembic; handy for a fresh
SQLite development database:
    python init_db.py
"""

from tradetracker.database import engine
from tradetracker.models import Base


def init_db() -> None:
    """Create all database tables defined in models."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")


if __name__ == "__main__":
    init_db()
