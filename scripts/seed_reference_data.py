#!/usr/bin/env python3
"""
Seed Reference Data
===================

Creates the tables and loads agencies, categories and admin users from
seed_data.yaml. Safe to run repeatedly.

Usage:
    python scripts/seed_reference_data.py [path/to/seed_data.yaml]
"""

import asyncio
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.admin.infrastructure import BcryptPasswordHasher
from src.config import settings
from src.infrastructure.database import (
    close_database,
    create_tables,
    get_session_context,
    init_database,
)
from src.infrastructure.database.seed import load_seed_document, seed_reference_data
from src.shared.infrastructure.logging import setup_logging


async def main():
    """Main function to seed reference data."""
    setup_logging(settings.log_level, settings.environment)

    seed_file = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent.parent / "seed_data.yaml"
    document = load_seed_document(seed_file)
    print(
        f"Loaded {len(document.agencies)} agencies, {len(document.categories)} categories "
        f"and {len(document.admins)} admins from {seed_file}"
    )

    init_database()
    try:
        await create_tables()
        async with get_session_context() as session:
            created = await seed_reference_data(session, document, BcryptPasswordHasher())
    finally:
        await close_database()

    print(
        f"Created {created['agencies']} agencies, {created['categories']} categories "
        f"and {created['admins']} admins"
    )


if __name__ == "__main__":
    asyncio.run(main())
