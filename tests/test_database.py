"""Tests for result persistence."""

import pytest

from bot.event_handler import EventHandler
from conftest import make_member
from database.manager import DatabaseManager, ResultsRecorder
from database.migrations import initialize_database
from game.ai import AI


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "data" / "tictactoe.db")


@pytest.fixture
def database(db_path):
    return DatabaseManager(db_path)


class TestDatabaseManager:

    @pytest.mark.asyncio
    async def test_unknown_player(self, db_path, database):
        await initialize_database(db_path)
        assert await database.get_player_stats("1") is None

    @pytest.mark.asyncio
    async def test_win_and_tie_are_counted(self, db_path, database, alice, bob):
        await initialize_database(db_path)

        await database.record_win(alice, bob)
        await database.record_win(alice, bob)
        await database.record_tie((alice, bob))

        alice_stats = await database.get_player_stats(str(alice.id))
        bob_stats = await database.get_player_stats(str(bob.id))
        assert (alice_stats["wins"], alice_stats["losses"], alice_stats["ties"]) == (2, 0, 1)
        assert (bob_stats["wins"], bob_stats["losses"], bob_stats["ties"]) == (0, 2, 1)
        assert alice_stats["username"] == alice.display_name
        assert alice_stats["last_played"] is not None

    @pytest.mark.asyncio
    async def test_ai_is_not_recorded(self, db_path, database, alice):
        await initialize_database(db_path)

        await database.record_win(AI(), alice)
        await database.record_tie((alice, AI()))

        leaderboard = await database.get_leaderboard()
        assert [entry["user_id"] for entry in leaderboard] == [str(alice.id)]

    @pytest.mark.asyncio
    async def test_leaderboard_order_and_limit(self, db_path, database):
        await initialize_database(db_path)
        players = [make_member(i) for i in range(1, 5)]
        for wins, player in enumerate(players):
            for _ in range(wins):
                await database.record_win(player, players[0])

        leaderboard = await database.get_leaderboard(limit=2)

        assert [entry["user_id"] for entry in leaderboard] == ["4", "3"]
        assert leaderboard[0]["wins"] == 3


class TestResultsRecorder:

    @pytest.mark.asyncio
    async def test_records_events(self, db_path, database, alice, bob):
        await initialize_database(db_path)
        handler = EventHandler()
        ResultsRecorder(database).register(handler)

        handler.emit_event("win", {"winner": alice, "loser": bob})
        handler.emit_event("tie", {"players": (alice, bob)})
        await handler.wait_pending()

        stats = await database.get_player_stats(str(alice.id))
        assert (stats["wins"], stats["ties"]) == (1, 1)
