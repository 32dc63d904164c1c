"""Database initialization script."""
import asyncio
import logging

from ticket_tally.database import AsyncSessionLocal, init_db
from ticket_tally.repositories.sql import SqlRepository
from ticket_tally.services.seed_service import seed_demo_data

logger = logging.getLogger("init_db")


async def init_database():
    """Create all tables and seed demo data."""
    logger.info("Creating database tables...")
    await init_db()
    logger.info("Tables created successfully!")

    async with AsyncSessionLocal() as db:
        await seed_demo_data(SqlRepository(db))

    logger.info("Database initialization complete!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    asyncio.run(init_database())
