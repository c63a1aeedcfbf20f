#!/usr/bin/env python3
"""Initialize the database schema and load the demo data."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from capnio.config import DATABASE_PATH
from capnio.database import MEMORY_PATH, create_tables, drop_tables, get_session
from capnio.services.seed_service import seed_demo_data


async def init_db() -> None:
    """Create all database tables and seed them when empty."""
    await create_tables()
    print("Database tables created successfully.")
    async with get_session() as session:
        if await seed_demo_data(session):
            print("Demo sites and catalog loaded.")
        else:
            print("Database already seeded.")


async def drop_db() -> None:
    """Drop all database tables."""
    await drop_tables()
    print("Database tables dropped.")


async def reset_db() -> None:
    """Drop and recreate all database tables."""
    await drop_db()
    await init_db()


if __name__ == "__main__":
    if DATABASE_PATH == MEMORY_PATH:
        print("DATABASE_PATH is :memory:, set it to a file path to initialize a persistent database.")
        sys.exit(1)
    if len(sys.argv) > 1 and sys.argv[1] == "--reset":
        asyncio.run(reset_db())
    else:
        asyncio.run(init_db())
