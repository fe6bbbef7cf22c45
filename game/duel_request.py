"""Duel requests sent to another member before a game starts."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

import discord

from game.errors import GameError
from game.messaging import MessageContent, MessagingTunnel
from utils.embeds import create_duel_request_embed

if TYPE_CHECKING:
    from game.state_manager import GameStateManager

logger = logging.getLogger(__name__)


class DuelRequestState(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class DuelRequest:
    """Invitation waiting for the invited member to accept or decline."""

    def __init__(
        self,
        manager: "GameStateManager",
        tunnel: MessagingTunnel,
        invited: discord.Member,
        expire_time: int,
        reactions: List[str],
        embed_color: int
    ):
        self.manager = manager
        self.tunnel = tunnel
        self.invited = invited
        self.expire_time = expire_time
        self.reactions = reactions
        self.embed_color = embed_color

        self.state = DuelRequestState.PENDING
        self.message: Optional[discord.Message] = None
        self.view: Optional["DuelRequestView"] = None

    @property
    def content(self) -> MessageContent:
        return {
            "content": self.invited.mention,
            "embed": create_duel_request_embed(
                self.tunnel.author,
                self.invited,
                self.expire_time,
                self.reactions,
                self.embed_color
            ),
        }

    @property
    def resolved(self) -> bool:
        return self.state is not DuelRequestState.PENDING

    async def attach_to(self, message: discord.Message) -> None:
        """Start waiting for an answer on the sent request message."""
        self.message = message
        self.view = DuelRequestView(self)
        await message.edit(view=self.view)

    async def accept(self, interaction: Optional[discord.Interaction] = None) -> None:
        if not self._resolve(DuelRequestState.ACCEPTED):
            return
        if interaction is not None:
            await interaction.response.edit_message(view=None)

        try:
            await self.manager.create_game(self.tunnel, self.invited)
        except GameError as e:
            logger.info("Accepted duel from %s could not start: %s", self.tunnel.author.id, e.message)
            await self.tunnel.end({"content": e.message, "embed": None})

    async def decline(self, interaction: Optional[discord.Interaction] = None) -> None:
        if not self._resolve(DuelRequestState.DECLINED):
            return
        if interaction is not None:
            await interaction.response.defer()
        await self.tunnel.end({
            "content": f"❌ {self.invited.mention} declined the duel with {self.tunnel.author.mention}.",
            "embed": None,
        })

    async def expire(self) -> None:
        if not self._resolve(DuelRequestState.EXPIRED):
            return
        await self.tunnel.end({
            "content": f"⌛ {self.invited.mention} did not answer the duel request in time.",
            "embed": None,
        })

    def _resolve(self, state: DuelRequestState) -> bool:
        """Move to a terminal state, once."""
        if self.resolved:
            return False

        self.state = state
        if self.view is not None:
            self.view.stop()
        logger.info(
            "Duel request from %s to %s %s",
            self.tunnel.author.id, self.invited.id, state.value
        )
        return True


class DuelRequestView(discord.ui.View):
    """Accept and decline buttons of a duel request."""

    def __init__(self, request: DuelRequest):
        super().__init__(timeout=request.expire_time)
        self.request = request

        accept_emoji, decline_emoji = request.reactions[:2]
        accept = discord.ui.Button(style=discord.ButtonStyle.success, emoji=accept_emoji)
        accept.callback = self._on_accept
        decline = discord.ui.Button(style=discord.ButtonStyle.danger, emoji=decline_emoji)
        decline.callback = self._on_decline
        self.add_item(accept)
        self.add_item(decline)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.request.invited.id:
            await interaction.response.send_message("❌ This duel request is not for you!", ephemeral=True)
            return False
        return True

    async def _on_accept(self, interaction: discord.Interaction):
        await self.request.accept(interaction)

    async def _on_decline(self, interaction: discord.Interaction):
        await self.request.decline(interaction)

    async def on_timeout(self):
        await self.request.expire()
