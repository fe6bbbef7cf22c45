"""Messaging tunnels hiding how a command reached the bot."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import discord

logger = logging.getLogger(__name__)

MessageContent = Dict[str, Any]

# Seconds before an error answer to a text command is deleted
ERROR_MESSAGE_LIFETIME = 10


class MessagingTunnel(ABC):
    """Replies to whoever started a game, whatever the transport."""

    def __init__(self):
        self._reply: Optional[discord.Message] = None

    @property
    @abstractmethod
    def author(self) -> discord.Member:
        """Member who issued the command."""

    @property
    @abstractmethod
    def channel(self) -> Optional[discord.abc.GuildChannel]:
        """Channel the command was issued in."""

    @property
    def reply(self) -> Optional[discord.Message]:
        """Last message sent through this tunnel."""
        return self._reply

    @abstractmethod
    async def reply_with(self, content: MessageContent, ephemeral_on_error: bool = False) -> discord.Message:
        """Send or update the tunnel message.

        The first call sends a reply, later calls edit it. Error answers
        (``ephemeral_on_error``) are only visible to the author where the
        transport allows it and never replace the tunnel message.
        """

    async def end(self, content: MessageContent) -> None:
        """Replace the tunnel message with a final content and drop its components."""
        if self._reply is None:
            return
        try:
            await self._reply.edit(view=None, **content)
        except discord.HTTPException as e:
            logger.warning("Could not end tunnel message %s: %s", self._reply.id, e)


class TextMessagingTunnel(MessagingTunnel):
    """Tunnel built from a text command message."""

    def __init__(self, origin: discord.Message):
        super().__init__()
        self.origin = origin

    @property
    def author(self) -> discord.Member:
        return self.origin.author

    @property
    def channel(self) -> Optional[discord.abc.GuildChannel]:
        return self.origin.channel

    async def reply_with(self, content: MessageContent, ephemeral_on_error: bool = False) -> discord.Message:
        if ephemeral_on_error:
            return await self.origin.reply(delete_after=ERROR_MESSAGE_LIFETIME, **content)

        if self._reply is not None:
            self._reply = await self._reply.edit(**content)
        else:
            self._reply = await self.origin.reply(**content)
        return self._reply


class CommandInteractionMessagingTunnel(MessagingTunnel):
    """Tunnel built from a slash command interaction."""

    def __init__(self, interaction: discord.Interaction):
        super().__init__()
        self.interaction = interaction

    @property
    def author(self) -> discord.Member:
        return self.interaction.user

    @property
    def channel(self) -> Optional[discord.abc.GuildChannel]:
        return self.interaction.channel

    async def reply_with(self, content: MessageContent, ephemeral_on_error: bool = False) -> discord.Message:
        if ephemeral_on_error:
            return await self._send(content, ephemeral=True)

        if self._reply is not None:
            self._reply = await self._reply.edit(**content)
        else:
            self._reply = await self._send(content)
        return self._reply

    async def _send(self, content: MessageContent, ephemeral: bool = False) -> discord.Message:
        if not self.interaction.response.is_done():
            await self.interaction.response.send_message(ephemeral=ephemeral, **content)
            return await self.interaction.original_response()
        return await self.interaction.followup.send(ephemeral=ephemeral, wait=True, **content)
