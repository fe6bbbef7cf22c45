"""Stats and leaderboard commands."""

from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from database.manager import ResultsRecorder, db_manager
from utils.embeds import create_leaderboard_embed, create_stats_embed


class StatsCommands(commands.Cog):
    """Stats and leaderboard commands."""

    def __init__(self, bot: commands.Bot, database=None):
        self.bot = bot
        self.database = database or db_manager
        self.recorder = ResultsRecorder(self.database)
        self.recorder.register(bot.event_handler)

    @app_commands.command(name="tictactoe_stats", description="View player statistics")
    @app_commands.describe(user="User to view stats for (default: yourself)")
    async def stats(self, interaction: discord.Interaction, user: Optional[discord.Member] = None):
        """View player statistics."""
        target_user = user or interaction.user

        stats = await self.database.get_player_stats(str(target_user.id))
        if not stats:
            await interaction.response.send_message(
                f"❌ No statistics found for {target_user.mention}!", ephemeral=True
            )
            return

        await interaction.response.send_message(embed=create_stats_embed(target_user, stats))

    @app_commands.command(name="tictactoe_leaderboard", description="View the leaderboard")
    @app_commands.describe(limit="Number of players to show")
    async def leaderboard(self, interaction: discord.Interaction, limit: app_commands.Range[int, 1, 25] = 10):
        """View the leaderboard."""
        entries = await self.database.get_leaderboard(limit)
        await interaction.response.send_message(embed=create_leaderboard_embed(entries))


async def setup(bot: commands.Bot):
    """Load the cog."""
    await bot.add_cog(StatsCommands(bot))
