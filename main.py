"""Main entry point for the Tic-Tac-Toe Bot."""

import asyncio
import logging
import os

import discord
from dotenv import load_dotenv

from bot.client import create_bot
from bot.events import setup_events
from database.migrations import initialize_database

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


async def main():
    """Main function to start the bot."""
    discord.utils.setup_logging(level=logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper()))

    # Get token
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.error("DISCORD_TOKEN not found in environment variables!")
        logger.error("Please create a .env file with your Discord bot token.")
        return

    await initialize_database()

    bot = create_bot()
    setup_events(bot)

    logger.info("Starting bot...")
    async with bot:
        await bot.start(token)


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user.")


if __name__ == "__main__":
    run()
