"""Checks run before any duel or game is started."""

import logging
import time
from typing import TYPE_CHECKING, Optional

import discord

from game.entity import Entity
from game.errors import BotInvitedError, UnknownUserError
from game.messaging import MessagingTunnel

if TYPE_CHECKING:
    from game.state_manager import GameStateManager

logger = logging.getLogger(__name__)


class GameStateValidator:
    """Read-only decisions over the state of a game state manager."""

    def __init__(self, manager: "GameStateManager"):
        self.manager = manager

    @property
    def config(self):
        return self.manager.config

    def is_interaction_valid(self, tunnel: MessagingTunnel) -> bool:
        """Check that the command context still allows a game to start."""
        channel = tunnel.channel
        author = tunnel.author
        if channel is None or author is None or getattr(channel, "guild", None) is None:
            logger.debug("Interaction rejected: unresolvable channel or author")
            return False

        allowed_channels = self.config.allowed_channel_ids
        if allowed_channels and channel.id not in allowed_channels:
            logger.debug("Interaction rejected: channel %s not allowed", channel.id)
            return False

        allowed_roles = self.config.allowed_role_ids
        if allowed_roles:
            roles = getattr(author, "roles", [])
            if not any(role.id in allowed_roles for role in roles):
                logger.debug("Interaction rejected: %s has no allowed role", author.id)
                return False

        return True

    def is_new_game_possible(self, tunnel: MessagingTunnel, invited: Optional[Entity] = None) -> bool:
        """Check that no registered game involves the author, the invited member or the channel."""
        for gameboard in self.manager.gameboards:
            player_ids = {entity.id for entity in gameboard.entities}
            if tunnel.author.id in player_ids:
                return False
            if invited is not None and invited.id in player_ids:
                return False
            if not self.config.simultaneous_games and _same_channel(gameboard.tunnel, tunnel):
                return False
        return True

    def is_member_on_cooldown(self, member: discord.abc.Snowflake) -> bool:
        end_time = self.manager.member_cooldown_end_times.get(member.id)
        return end_time is not None and end_time > time.time()

    def check_invitation(self, tunnel: MessagingTunnel, inviter: discord.Member, invited: Optional[discord.Member]) -> None:
        """Make sure a member can be invited to a duel.

        Raises:
            BotInvitedError: the invited member is a bot account
            UnknownUserError: the member invited themselves or cannot see the channel
        """
        if invited is None:
            return
        if invited.bot:
            raise BotInvitedError()
        if inviter.id == invited.id or not tunnel.channel.permissions_for(invited).view_channel:
            raise UnknownUserError()


def _same_channel(first: MessagingTunnel, second: MessagingTunnel) -> bool:
    if first.channel is None or second.channel is None:
        return False
    return first.channel.id == second.channel.id
