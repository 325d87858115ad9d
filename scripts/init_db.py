"""
Database initialization script

Run once (or after schema changes) to create collections and indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection
from app.db.indexes import create_indexes

logger = get_logger(__name__)


async def main():
    await connect_to_mongo()
    try:
        await create_indexes()
        logger.info("🎉 Database initialization complete")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
