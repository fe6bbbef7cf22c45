"""Manages active games, duel requests and member cooldowns."""

import logging
import time
from typing import Dict, List, Optional

import discord

from bot.event_handler import EventHandler
from config import GameConfig
from game.ai import AI, create_ai
from game.duel_request import DuelRequest
from game.errors import GameInProgressError, GameVetoedError, MemberOnCooldownError
from game.gameboard import GameBoard
from game.messaging import MessagingTunnel
from game.outcome import GameOutcome, OutcomeKind
from game.validator import GameStateValidator

logger = logging.getLogger(__name__)


class GameStateManager:
    """Owns the gameboards in progress and the duel cooldowns of members.

    Every mutation of ``gameboards`` and ``member_cooldown_end_times`` goes
    through ``request_duel``, ``create_game`` and ``end_game``. Both start
    operations validate and register synchronously, before their first
    ``await``, so two concurrent commands cannot both pass validation for
    the same member.
    """

    def __init__(self, config: GameConfig, event_handler: EventHandler):
        self.config = config
        self.event_handler = event_handler
        self.gameboards: List[GameBoard] = []
        # Member ID -> time.time() at which the member can request a duel again
        self.member_cooldown_end_times: Dict[int, float] = {}
        self.validator = GameStateValidator(self)

    async def request_duel(self, tunnel: MessagingTunnel, invited: discord.Member) -> None:
        """Send a duel request from the tunnel author to another member.

        Args:
            tunnel: Tunnel the command came from
            invited: Member invited to the duel

        Raises:
            MemberOnCooldownError: the author requested a duel too recently
            GameInProgressError: the author or invited member is already playing
        """
        if not self.validator.is_interaction_valid(tunnel):
            return
        if self.validator.is_member_on_cooldown(tunnel.author):
            raise MemberOnCooldownError()
        if not self.validator.is_new_game_possible(tunnel, invited):
            raise GameInProgressError()

        duel = DuelRequest(
            self,
            tunnel,
            invited,
            self.config.request_expire_time,
            self.config.request_reactions,
            self.config.embed_color
        )

        author_id = tunnel.author.id
        previous_cooldown = self.member_cooldown_end_times.get(author_id)
        cooldown = self.config.request_cooldown_time or 0
        if cooldown > 0:
            self.member_cooldown_end_times[author_id] = time.time() + cooldown

        logger.info("Duel requested by %s to %s", author_id, invited.id)
        try:
            message = await tunnel.reply_with(duel.content)
            await duel.attach_to(message)
        except BaseException:
            # No request reached the channel
            if previous_cooldown is None:
                self.member_cooldown_end_times.pop(author_id, None)
            else:
                self.member_cooldown_end_times[author_id] = previous_cooldown
            raise

    async def create_game(self, tunnel: MessagingTunnel, invited: Optional[discord.Member] = None) -> None:
        """Start a game between the tunnel author and a member, or the AI.

        Raises:
            GameInProgressError: the author or invited member is already playing
            GameVetoedError: a ``newGame`` listener refused the game
        """
        if not self.validator.is_interaction_valid(tunnel):
            return
        if not self.validator.is_new_game_possible(tunnel, invited):
            raise GameInProgressError()

        gameboard = GameBoard(self, tunnel, invited or self.create_ai(), self.config)

        result = self.event_handler.emit_event("newGame", {"players": gameboard.entities})
        if result.vetoed:
            raise GameVetoedError(result.reason)

        self.gameboards.append(gameboard)
        logger.info(
            "Game created in channel %s: %s vs %s",
            tunnel.channel.id, gameboard.entities[0].id, gameboard.entities[1].id
        )

        try:
            message = await tunnel.reply_with(gameboard.content)
            await gameboard.attach_to(message)
        except BaseException:
            # Nothing will ever expire a board that was never attached
            if gameboard in self.gameboards:
                self.gameboards.remove(gameboard)
            logger.warning("Game in channel %s could not be sent, unregistered", tunnel.channel.id)
            raise

    def end_game(self, gameboard: GameBoard, outcome: GameOutcome) -> None:
        """Unregister a gameboard and notify listeners of its outcome."""
        if gameboard in self.gameboards:
            self.gameboards.remove(gameboard)
        else:
            logger.warning("Ending a gameboard that is not registered")
            return

        if outcome.kind is OutcomeKind.DECISIVE:
            loser = next(entity for entity in gameboard.entities if entity is not outcome.winner)
            self.event_handler.emit_event("win", {"winner": outcome.winner, "loser": loser})
        elif outcome.kind is OutcomeKind.TIE:
            self.event_handler.emit_event("tie", {"players": gameboard.entities})

    def games_in_channel(self, channel: discord.abc.Snowflake) -> List[GameBoard]:
        """Get the gameboards started in a channel."""
        return [
            gameboard for gameboard in self.gameboards
            if gameboard.tunnel.channel is not None and gameboard.tunnel.channel.id == channel.id
        ]

    def create_ai(self) -> AI:
        """Create an AI with the configured difficulty."""
        return create_ai(self.config.ai_difficulty)
