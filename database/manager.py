"""Database operations manager."""

import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import aiosqlite
from dotenv import load_dotenv

from bot.event_handler import EventHandler
from game.ai import AI
from game.entity import Entity

load_dotenv()


class DatabaseManager:
    """Manages player results."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or os.getenv("DATABASE_PATH", "./data/tictactoe.db")

    async def _touch_player(self, db: aiosqlite.Connection, user_id: str, username: str) -> None:
        await db.execute(
            """
            INSERT INTO players (user_id, username, last_played)
            VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                username = excluded.username,
                last_played = excluded.last_played
            """,
            (user_id, username, datetime.utcnow().isoformat(sep=" ", timespec="seconds"))
        )

    async def record_win(self, winner: Entity, loser: Entity) -> None:
        """Add a win to the winner and a loss to the loser."""
        async with aiosqlite.connect(self.db_path) as db:
            for entity, column in ((winner, "wins"), (loser, "losses")):
                if isinstance(entity, AI):
                    continue
                await self._touch_player(db, str(entity.id), entity.display_name)
                await db.execute(
                    f"UPDATE players SET {column} = {column} + 1 WHERE user_id = ?",
                    (str(entity.id),)
                )
            await db.commit()

    async def record_tie(self, players: Sequence[Entity]) -> None:
        """Add a tie to every member of a game."""
        async with aiosqlite.connect(self.db_path) as db:
            for entity in players:
                if isinstance(entity, AI):
                    continue
                await self._touch_player(db, str(entity.id), entity.display_name)
                await db.execute(
                    "UPDATE players SET ties = ties + 1 WHERE user_id = ?",
                    (str(entity.id),)
                )
            await db.commit()

    async def get_player_stats(self, user_id: str) -> Optional[Dict]:
        """Get results of a player."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT user_id, username, wins, losses, ties, last_played FROM players WHERE user_id = ?",
                (user_id,)
            ) as cursor:
                row = await cursor.fetchone()
                return dict(row) if row else None

    async def get_leaderboard(self, limit: int = 10) -> List[Dict]:
        """Get players with the most wins."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                """
                SELECT user_id, username, wins, losses, ties
                FROM players
                ORDER BY wins DESC, losses ASC, username ASC
                LIMIT ?
                """,
                (limit,)
            ) as cursor:
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]


class ResultsRecorder:
    """Stores game results announced by the event handler."""

    def __init__(self, manager: DatabaseManager):
        self.manager = manager

    def register(self, event_handler: EventHandler) -> None:
        event_handler.on("win", self.on_win)
        event_handler.on("tie", self.on_tie)

    async def on_win(self, payload: Dict) -> None:
        await self.manager.record_win(payload["winner"], payload["loser"])

    async def on_tie(self, payload: Dict) -> None:
        await self.manager.record_tie(payload["players"])


# Global database manager instance
db_manager = DatabaseManager()
