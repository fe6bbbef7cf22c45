"""Tic-tac-toe board rules."""

from typing import List, Optional

# Every line of three cells that wins the game
WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Board:
    """A 3x3 grid where two players, 0 and 1, take turns."""

    SIZE = 3

    def __init__(self):
        self.cells: List[Optional[int]] = [None] * (self.SIZE * self.SIZE)
        self.current_player = 0

    def copy(self) -> "Board":
        clone = Board()
        clone.cells = list(self.cells)
        clone.current_player = self.current_player
        return clone

    def is_empty_cell(self, position: int) -> bool:
        return 0 <= position < len(self.cells) and self.cells[position] is None

    def empty_cells(self) -> List[int]:
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def play(self, position: int) -> None:
        """Mark a cell for the current player and pass the turn."""
        if self.is_finished():
            raise ValueError("The game is already finished")
        if not self.is_empty_cell(position):
            raise ValueError(f"Cell {position} is not playable")

        self.cells[position] = self.current_player
        self.current_player = 1 - self.current_player

    def winner(self) -> Optional[int]:
        """Get the player owning a complete line, if any."""
        for a, b, c in WINNING_LINES:
            if self.cells[a] is not None and self.cells[a] == self.cells[b] == self.cells[c]:
                return self.cells[a]
        return None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def is_finished(self) -> bool:
        return self.winner() is not None or self.is_full()
