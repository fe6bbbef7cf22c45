"""Database initialization and migrations."""

import logging
import os
from pathlib import Path
from typing import Optional

import aiosqlite
from dotenv import load_dotenv

from database.models import CREATE_INDEXES, CREATE_PLAYERS_TABLE

load_dotenv()

logger = logging.getLogger(__name__)


async def initialize_database(db_path: Optional[str] = None):
    """Initialize database with all tables."""
    db_path = db_path or os.getenv("DATABASE_PATH", "./data/tictactoe.db")

    # Create data directory if it doesn't exist
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db:
        await db.execute(CREATE_PLAYERS_TABLE)
        for index_sql in CREATE_INDEXES:
            await db.execute(index_sql)
        await db.commit()

    logger.info("Database initialized at %s", db_path)
