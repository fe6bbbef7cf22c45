"""Tests for the game state manager."""

import asyncio
import time
from unittest.mock import MagicMock, patch

import discord
import pytest

from conftest import FakeTunnel, make_channel
from game.ai import AI, AIDifficultyLevel
from game.duel_request import DuelRequest
from game.errors import GameInProgressError, GameVetoedError, MemberOnCooldownError
from game.gameboard import GameBoard
from game.outcome import GameOutcome


def register_game(manager, author, opponent, channel=None):
    """Put a gameboard in the registry without going through Discord."""
    gameboard = GameBoard(manager, FakeTunnel(author, channel), opponent, manager.config)
    manager.gameboards.append(gameboard)
    return gameboard


class UnreachableTunnel(FakeTunnel):
    """Tunnel of a channel the bot cannot post in."""

    async def reply_with(self, content, ephemeral_on_error=False):
        raise discord.HTTPException(MagicMock(status=403, reason="Forbidden"), "Missing Access")


class SlowTunnel(FakeTunnel):
    """Tunnel giving other commands a chance to run while replying."""

    async def reply_with(self, content, ephemeral_on_error=False):
        await asyncio.sleep(0)
        return await super().reply_with(content, ephemeral_on_error)


class TestRequestDuel:
    """Tests for duel requests."""

    @pytest.mark.asyncio
    async def test_request_sends_and_attaches_duel(self, manager, alice, bob):
        tunnel = FakeTunnel(alice)

        with patch.object(DuelRequest, "attach_to") as attach_to:
            await manager.request_duel(tunnel, bob)

        assert len(tunnel.replies) == 1
        assert tunnel.replies[0]["content"] == bob.mention
        attach_to.assert_awaited_once_with(tunnel.reply)
        assert manager.gameboards == []

    @pytest.mark.asyncio
    async def test_cooldown_recorded_for_inviter(self, manager, alice, bob):
        manager.config.request_cooldown_time = 30
        tunnel = FakeTunnel(alice)

        with patch.object(DuelRequest, "attach_to"):
            await manager.request_duel(tunnel, bob)

        assert manager.member_cooldown_end_times[alice.id] == pytest.approx(time.time() + 30, abs=1)
        assert bob.id not in manager.member_cooldown_end_times

    @pytest.mark.asyncio
    async def test_no_cooldown_when_disabled(self, manager, alice, bob):
        with patch.object(DuelRequest, "attach_to"):
            await manager.request_duel(FakeTunnel(alice), bob)

        assert manager.member_cooldown_end_times == {}

    @pytest.mark.asyncio
    async def test_member_on_cooldown_is_rejected_before_request(self, manager, alice, bob):
        manager.member_cooldown_end_times[alice.id] = time.time() + 60
        tunnel = FakeTunnel(alice)

        with patch("game.state_manager.DuelRequest") as duel_class:
            with pytest.raises(MemberOnCooldownError):
                await manager.request_duel(tunnel, bob)

        duel_class.assert_not_called()
        assert tunnel.replies == []

    @pytest.mark.asyncio
    async def test_elapsed_cooldown_allows_request(self, manager, alice, bob):
        manager.member_cooldown_end_times[alice.id] = time.time() - 1

        with patch.object(DuelRequest, "attach_to"):
            await manager.request_duel(FakeTunnel(alice), bob)

    @pytest.mark.asyncio
    async def test_failed_request_does_not_start_cooldown(self, manager, alice, bob):
        manager.config.request_cooldown_time = 30

        with pytest.raises(discord.HTTPException):
            await manager.request_duel(UnreachableTunnel(alice), bob)

        assert manager.member_cooldown_end_times == {}
        assert not manager.validator.is_member_on_cooldown(alice)

    @pytest.mark.asyncio
    async def test_failed_request_keeps_previous_cooldown(self, manager, alice, bob):
        manager.config.request_cooldown_time = 30
        earlier = time.time() - 5
        manager.member_cooldown_end_times[alice.id] = earlier

        with pytest.raises(discord.HTTPException):
            await manager.request_duel(UnreachableTunnel(alice), bob)

        assert manager.member_cooldown_end_times == {alice.id: earlier}

    @pytest.mark.asyncio
    async def test_invited_member_already_playing(self, manager, alice, bob, carol):
        register_game(manager, bob, carol, make_channel(200))

        with pytest.raises(GameInProgressError):
            await manager.request_duel(FakeTunnel(alice), bob)

    @pytest.mark.asyncio
    async def test_invalid_interaction_is_silent(self, manager, alice, bob):
        tunnel = FakeTunnel(alice)
        tunnel._channel.guild = None

        await manager.request_duel(tunnel, bob)

        assert tunnel.replies == []
        assert tunnel.errors == []


class TestCreateGame:
    """Tests for game creation."""

    @pytest.mark.asyncio
    async def test_game_against_member(self, manager, alice, bob):
        tunnel = FakeTunnel(alice)

        with patch.object(GameBoard, "attach_to") as attach_to:
            await manager.create_game(tunnel, bob)

        assert len(manager.gameboards) == 1
        gameboard = manager.gameboards[0]
        assert gameboard.entities == (alice, bob)
        attach_to.assert_awaited_once_with(tunnel.reply)
        assert tunnel.replies[0]["content"] == f"{alice.mention} vs {bob.mention}"

    @pytest.mark.asyncio
    async def test_game_against_ai_uses_configured_difficulty(self, manager, alice):
        manager.config.ai_difficulty = "Hard"

        with patch.object(GameBoard, "attach_to"):
            await manager.create_game(FakeTunnel(alice))

        first, second = manager.gameboards[0].entities
        assert first is alice
        assert isinstance(second, AI)
        assert second.difficulty is AIDifficultyLevel.HARD

    @pytest.mark.asyncio
    async def test_game_against_ai_defaults_without_difficulty(self, manager, alice):
        manager.config.ai_difficulty = None

        with patch.object(GameBoard, "attach_to"):
            await manager.create_game(FakeTunnel(alice))

        assert manager.gameboards[0].entities[1].difficulty is AIDifficultyLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_author_already_playing_is_rejected(self, manager, alice, bob):
        register_game(manager, alice, bob, make_channel(200))
        tunnel = FakeTunnel(alice)

        with pytest.raises(GameInProgressError):
            await manager.create_game(tunnel)

        assert len(manager.gameboards) == 1
        assert tunnel.replies == []

    @pytest.mark.asyncio
    async def test_failed_reply_unregisters_game(self, manager, alice, bob):
        with pytest.raises(discord.HTTPException):
            await manager.create_game(UnreachableTunnel(alice), bob)

        assert manager.gameboards == []

        with patch.object(GameBoard, "attach_to"):
            await manager.create_game(FakeTunnel(alice), bob)

        assert len(manager.gameboards) == 1

    @pytest.mark.asyncio
    async def test_failed_attach_unregisters_game(self, manager, alice):
        with patch.object(GameBoard, "attach_to", side_effect=discord.HTTPException(
            MagicMock(status=404, reason="Not Found"), "Unknown Message"
        )):
            with pytest.raises(discord.HTTPException):
                await manager.create_game(FakeTunnel(alice))

        assert manager.gameboards == []

    @pytest.mark.asyncio
    async def test_new_game_event_carries_players(self, manager, event_handler, alice, bob):
        received = []
        event_handler.on("newGame", received.append)

        with patch.object(GameBoard, "attach_to"):
            await manager.create_game(FakeTunnel(alice), bob)

        assert received == [{"players": (alice, bob)}]

    @pytest.mark.asyncio
    async def test_veto_leaves_registry_unchanged(self, manager, event_handler, alice, bob):
        def refuse(payload):
            raise RuntimeError("Games are disabled today")

        event_handler.on("newGame", refuse)
        tunnel = FakeTunnel(alice)

        with pytest.raises(GameVetoedError) as exc_info:
            await manager.create_game(tunnel, bob)

        assert exc_info.value.message == "Games are disabled today"
        assert manager.gameboards == []
        assert tunnel.replies == []

    @pytest.mark.asyncio
    async def test_veto_without_reason_uses_default_message(self, manager, event_handler, alice):
        def refuse(payload):
            raise RuntimeError()

        event_handler.on("newGame", refuse)

        with pytest.raises(GameVetoedError) as exc_info:
            await manager.create_game(FakeTunnel(alice))

        assert exc_info.value.message == GameInProgressError.default_message


class TestEndGame:
    """Tests for game teardown."""

    @pytest.fixture
    def events(self, event_handler):
        received = []
        event_handler.on("win", lambda payload: received.append(("win", payload)))
        event_handler.on("tie", lambda payload: received.append(("tie", payload)))
        return received

    def test_decisive_outcome_emits_win(self, manager, events, alice, bob):
        gameboard = register_game(manager, alice, bob)

        manager.end_game(gameboard, GameOutcome.decisive(bob))

        assert events == [("win", {"winner": bob, "loser": alice})]
        assert manager.gameboards == []

    def test_tie_outcome_emits_tie(self, manager, events, alice, bob):
        gameboard = register_game(manager, alice, bob)

        manager.end_game(gameboard, GameOutcome.tie())

        assert events == [("tie", {"players": (alice, bob)})]
        assert manager.gameboards == []

    def test_unresolved_outcome_emits_nothing(self, manager, events, alice, bob):
        gameboard = register_game(manager, alice, bob)

        manager.end_game(gameboard, GameOutcome.unresolved())

        assert events == []
        assert manager.gameboards == []

    def test_only_the_given_gameboard_is_removed(self, manager, events, alice, bob, carol):
        first = register_game(manager, alice, bob)
        second = register_game(manager, carol, AI())

        manager.end_game(first, GameOutcome.decisive(bob))
        manager.end_game(first, GameOutcome.decisive(bob))

        assert manager.gameboards == [second]
        assert events == [("win", {"winner": bob, "loser": alice})]

    def test_unregistered_gameboard_emits_nothing(self, manager, events, alice, bob):
        gameboard = GameBoard(manager, FakeTunnel(alice), bob, manager.config)

        manager.end_game(gameboard, GameOutcome.tie())

        assert events == []


class TestChannelStatus:
    def test_games_in_channel(self, manager, alice, bob, carol):
        here, elsewhere = make_channel(1), make_channel(2)
        gameboard = register_game(manager, alice, bob, here)
        register_game(manager, carol, AI(), elsewhere)

        assert manager.games_in_channel(here) == [gameboard]
        assert manager.games_in_channel(make_channel(3)) == []


class TestConcurrentRequests:
    """Two commands racing for the same member."""

    @pytest.mark.asyncio
    async def test_only_one_game_for_same_member(self, manager, alice, bob, carol):
        with patch.object(GameBoard, "attach_to"):
            results = await asyncio.gather(
                manager.create_game(SlowTunnel(alice, make_channel(1)), bob),
                manager.create_game(SlowTunnel(carol, make_channel(2)), bob),
                return_exceptions=True
            )

        assert results[0] is None
        assert isinstance(results[1], GameInProgressError)
        assert len(manager.gameboards) == 1
        assert manager.gameboards[0].entities == (alice, bob)

    @pytest.mark.asyncio
    async def test_only_one_request_within_cooldown(self, manager, alice, bob, carol):
        manager.config.request_cooldown_time = 30

        with patch.object(DuelRequest, "attach_to"):
            results = await asyncio.gather(
                manager.request_duel(SlowTunnel(alice, make_channel(1)), bob),
                manager.request_duel(SlowTunnel(alice, make_channel(2)), carol),
                return_exceptions=True
            )

        assert results[0] is None
        assert isinstance(results[1], MemberOnCooldownError)
