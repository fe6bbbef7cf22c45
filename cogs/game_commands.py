"""Game commands for the tic-tac-toe bot."""

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from game.errors import GameError
from game.messaging import CommandInteractionMessagingTunnel, MessagingTunnel, TextMessagingTunnel
from game.state_manager import GameStateManager
from utils.embeds import create_channel_status_embed

logger = logging.getLogger(__name__)


class GameCommands(commands.Cog):
    """Commands to start duels and games.

    Text commands (``?ttt @member``) and slash commands
    (``/tictactoe opponent:@member``) end up in the same invitation flow.
    """

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.config = bot.game_config
        self.manager = GameStateManager(self.config, bot.event_handler)

    # Entry points
    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        await self.handle_message(message)

    @app_commands.command(name="tictactoe", description="Play tic-tac-toe against a member or the AI")
    @app_commands.describe(opponent="Member to challenge (leave empty to play against the AI)")
    @app_commands.guild_only()
    async def tictactoe(self, interaction: discord.Interaction, opponent: Optional[discord.Member] = None):
        """Play tic-tac-toe against a member or the AI."""
        await self.handle_interaction(interaction, opponent)

    @app_commands.command(name="tictactoe_status", description="See the games running in this channel")
    @app_commands.guild_only()
    async def status(self, interaction: discord.Interaction):
        """See the games running in this channel."""
        gameboards = self.manager.games_in_channel(interaction.channel)
        embed = create_channel_status_embed(gameboards, interaction.channel.name)
        await interaction.response.send_message(embed=embed, ephemeral=True)

    # Handlers
    async def handle_message(self, message: discord.Message, no_trigger: bool = False):
        """Handle a text message that may contain the text command."""
        if message.author.bot or message.guild is None:
            return
        if not no_trigger and not (
            self.config.text_command and message.content.startswith(self.config.text_command)
        ):
            return

        tunnel = TextMessagingTunnel(message)
        # Reply pings land in mentions without being in the message text
        invited = next(
            (
                user for user in message.mentions
                if isinstance(user, discord.Member) and user.id in message.raw_mentions
            ),
            None
        )
        await self._run(tunnel, message.author, invited)

    async def handle_interaction(self, interaction: discord.Interaction, opponent: Optional[discord.Member] = None):
        """Handle a slash command interaction."""
        tunnel = CommandInteractionMessagingTunnel(interaction)
        await self._run(tunnel, interaction.user, opponent)

    async def _run(self, tunnel: MessagingTunnel, inviter: discord.Member, invited: Optional[discord.Member]):
        try:
            await self.process_invitation(tunnel, inviter, invited)
        except GameError as e:
            logger.debug("Invitation from %s rejected: %s", inviter.id, e.message)
            await tunnel.reply_with({"content": e.message}, ephemeral_on_error=True)

    async def process_invitation(
        self,
        tunnel: MessagingTunnel,
        inviter: discord.Member,
        invited: Optional[discord.Member] = None
    ):
        """Validate an invitation, then request a duel or start a game against the AI."""
        self.manager.validator.check_invitation(tunnel, inviter, invited)

        if invited is not None:
            await self.manager.request_duel(tunnel, invited)
        else:
            await self.manager.create_game(tunnel)


async def setup(bot: commands.Bot):
    """Load the cog."""
    await bot.add_cog(GameCommands(bot))
