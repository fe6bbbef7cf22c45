"""AI opponent for games played without a second member."""

import logging
import random
from enum import Enum
from typing import Optional

from game.board import Board

logger = logging.getLogger(__name__)


class AIDifficultyLevel(Enum):
    """Difficulty levels; the value is the chance to play the best move."""
    EASY = 0.25
    MEDIUM = 0.6
    HARD = 0.85
    UNBEATABLE = 1.0

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["AIDifficultyLevel"]:
        """Find a level by its name, ignoring case."""
        if not name:
            return None
        return cls.__members__.get(name.strip().upper())


DEFAULT_DIFFICULTY = AIDifficultyLevel.MEDIUM


class AI:
    """Computer-controlled entity."""

    id = "AI"

    def __init__(self, difficulty: Optional[AIDifficultyLevel] = None, rng: Optional[random.Random] = None):
        self.difficulty = difficulty or DEFAULT_DIFFICULTY
        self._rng = rng or random.Random()

    @property
    def display_name(self) -> str:
        return "AI"

    @property
    def mention(self) -> str:
        return f"**AI** ({self.difficulty.label})"

    def __repr__(self) -> str:
        return f"<AI difficulty={self.difficulty.label}>"

    def operate(self, board: Board) -> int:
        """Choose the cell to play on the given board."""
        choices = board.empty_cells()
        if not choices:
            raise ValueError("No cell left to play")

        if self._rng.random() < self.difficulty.value:
            return self._best_move(board)
        return self._rng.choice(choices)

    def _best_move(self, board: Board) -> int:
        me = board.current_player
        best_score, best_moves = None, []
        for position in board.empty_cells():
            child = board.copy()
            child.play(position)
            score = -_negamax(child, 1)
            if best_score is None or score > best_score:
                best_score, best_moves = score, [position]
            elif score == best_score:
                best_moves.append(position)
        logger.debug("AI player %s picks among %s (score %s)", me, best_moves, best_score)
        return self._rng.choice(best_moves)


def _negamax(board: Board, depth: int) -> int:
    """Score a position from the point of view of the player to move."""
    winner = board.winner()
    if winner is not None:
        # Only the player who just moved can have completed a line
        return -(10 - depth)
    if board.is_full():
        return 0

    best = None
    for position in board.empty_cells():
        child = board.copy()
        child.play(position)
        score = -_negamax(child, depth + 1)
        if best is None or score > best:
            best = score
    return best


def create_ai(difficulty_name: Optional[str] = None) -> AI:
    """Create an AI from a configured difficulty name, defaulting when unknown."""
    level = AIDifficultyLevel.from_name(difficulty_name)
    if difficulty_name and level is None:
        logger.warning("Unknown AI difficulty %r, using %s", difficulty_name, DEFAULT_DIFFICULTY.label)
    return AI(level)
