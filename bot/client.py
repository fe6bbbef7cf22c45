"""Discord bot client setup."""

import logging
from typing import Optional

import discord
from discord.ext import commands

from bot.event_handler import EventHandler
from config import GameConfig

logger = logging.getLogger(__name__)

EXTENSIONS = (
    "cogs.game_commands",
    "cogs.stats_commands",
)


class TicTacToeBot(commands.Bot):
    """Bot carrying the game configuration and the game event handler."""

    def __init__(self, game_config: GameConfig, **kwargs):
        super().__init__(**kwargs)
        self.game_config = game_config
        self.event_handler = EventHandler()

    async def setup_hook(self):
        for extension in EXTENSIONS:
            await self.load_extension(extension)
            logger.info("Loaded extension %s", extension)


def create_bot(game_config: Optional[GameConfig] = None) -> TicTacToeBot:
    """Create and configure Discord bot."""
    # Set up intents
    intents = discord.Intents.default()
    intents.message_content = True
    intents.guilds = True
    intents.members = True

    # command_prefix is required even if text commands are handled by the game cog
    bot = TicTacToeBot(
        game_config or GameConfig.from_env(),
        command_prefix=commands.when_mentioned,
        intents=intents
    )

    return bot
