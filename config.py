"""Configuration constants for the Tic-Tac-Toe Bot."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

# Commands
TEXT_COMMAND = "?ttt"

# Duel settings
REQUEST_EXPIRE_TIME = 60  # seconds to answer a duel request
REQUEST_COOLDOWN_TIME = 0  # seconds before a member can request again
REQUEST_REACTIONS = ["👍", "👎"]  # accept, decline

# Game settings
GAME_EXPIRE_TIME = 30  # seconds without a move before the game expires
AI_DIFFICULTY = "Medium"
SIMULTANEOUS_GAMES = False
BOARD_EMOJIS = ["❌", "⭕"]

EMBED_COLOR = 0x2980B9


def _get_list(name: str) -> List[int]:
    raw = os.getenv(name, "")
    return [int(value) for value in raw.split(",") if value.strip()]


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class GameConfig:
    """Settings read by the game state manager and its collaborators."""
    text_command: Optional[str] = TEXT_COMMAND

    request_expire_time: int = REQUEST_EXPIRE_TIME
    request_cooldown_time: int = REQUEST_COOLDOWN_TIME
    request_reactions: List[str] = field(default_factory=lambda: list(REQUEST_REACTIONS))

    game_expire_time: int = GAME_EXPIRE_TIME
    ai_difficulty: Optional[str] = AI_DIFFICULTY
    simultaneous_games: bool = SIMULTANEOUS_GAMES
    board_emojis: List[str] = field(default_factory=lambda: list(BOARD_EMOJIS))
    embed_color: int = EMBED_COLOR

    # Empty lists mean every channel / every member is allowed
    allowed_channel_ids: List[int] = field(default_factory=list)
    allowed_role_ids: List[int] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Build a configuration from environment variables."""
        return cls(
            text_command=os.getenv("TTT_TEXT_COMMAND", TEXT_COMMAND) or None,
            request_expire_time=int(os.getenv("TTT_REQUEST_EXPIRE_TIME", REQUEST_EXPIRE_TIME)),
            request_cooldown_time=int(os.getenv("TTT_REQUEST_COOLDOWN_TIME", REQUEST_COOLDOWN_TIME)),
            game_expire_time=int(os.getenv("TTT_GAME_EXPIRE_TIME", GAME_EXPIRE_TIME)),
            ai_difficulty=os.getenv("TTT_AI_DIFFICULTY", AI_DIFFICULTY) or None,
            simultaneous_games=_get_bool("TTT_SIMULTANEOUS_GAMES", SIMULTANEOUS_GAMES),
            embed_color=int(os.getenv("TTT_EMBED_COLOR", str(EMBED_COLOR)), 0),
            allowed_channel_ids=_get_list("TTT_ALLOWED_CHANNEL_IDS"),
            allowed_role_ids=_get_list("TTT_ALLOWED_ROLE_IDS"),
        )
