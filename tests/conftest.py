"""Shared fixtures and discord fakes."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from bot.event_handler import EventHandler
from config import GameConfig
from game.messaging import MessagingTunnel
from game.state_manager import GameStateManager


def make_member(member_id: int, bot: bool = False, roles=None) -> MagicMock:
    member = MagicMock()
    member.id = member_id
    member.bot = bot
    member.display_name = f"member{member_id}"
    member.mention = f"<@{member_id}>"
    member.roles = roles or []
    return member


def make_channel(channel_id: int = 100, visible: bool = True) -> MagicMock:
    channel = MagicMock()
    channel.id = channel_id
    channel.name = f"channel{channel_id}"
    channel.guild = MagicMock()
    channel.permissions_for.return_value = MagicMock(view_channel=visible)
    return channel


def make_message(message_id: int = 1) -> MagicMock:
    message = MagicMock()
    message.id = message_id
    message.edit = AsyncMock(return_value=message)
    return message


def make_interaction(user) -> MagicMock:
    interaction = MagicMock()
    interaction.user = user
    interaction.response.is_done.return_value = False
    interaction.response.send_message = AsyncMock()
    interaction.response.edit_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    return interaction


class FakeTunnel(MessagingTunnel):
    """Tunnel recording what the bot replied."""

    def __init__(self, author, channel=None):
        super().__init__()
        self._author = author
        self._channel = channel if channel is not None else make_channel()
        self.replies = []
        self.errors = []

    @property
    def author(self):
        return self._author

    @property
    def channel(self):
        return self._channel

    async def reply_with(self, content, ephemeral_on_error=False):
        if ephemeral_on_error:
            self.errors.append(content)
            return make_message(0)
        self.replies.append(content)
        if self._reply is None:
            self._reply = make_message(len(self.replies))
        return self._reply


@pytest.fixture
def config():
    return GameConfig(
        request_expire_time=60,
        request_cooldown_time=0,
        game_expire_time=30,
        ai_difficulty="Medium",
    )


@pytest.fixture
def event_handler():
    return EventHandler()


@pytest.fixture
def manager(config, event_handler):
    return GameStateManager(config, event_handler)


@pytest.fixture
def channel():
    return make_channel(100)


@pytest.fixture
def alice():
    return make_member(1)


@pytest.fixture
def bob():
    return make_member(2)


@pytest.fixture
def carol():
    return make_member(3)
