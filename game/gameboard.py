"""Active games and their board buttons."""

import logging
from typing import TYPE_CHECKING, Optional, Tuple

import discord

from config import GameConfig
from game.ai import AI
from game.board import Board
from game.entity import Entity
from game.messaging import MessageContent, MessagingTunnel
from game.outcome import GameOutcome, OutcomeKind
from utils.embeds import create_gameboard_embed

if TYPE_CHECKING:
    from game.state_manager import GameStateManager

logger = logging.getLogger(__name__)

# Buttons need a label or an emoji, empty cells show a zero-width space
EMPTY_LABEL = "\u200b"


class GameBoard:
    """A game between the tunnel author and a member or an AI."""

    def __init__(
        self,
        manager: "GameStateManager",
        tunnel: MessagingTunnel,
        opponent: Entity,
        config: GameConfig
    ):
        self.manager = manager
        self.tunnel = tunnel
        self.config = config
        self._entities: Tuple[Entity, Entity] = (tunnel.author, opponent)

        self.board = Board()
        self.expire_time = config.game_expire_time
        self.outcome: Optional[GameOutcome] = None
        self.message: Optional[discord.Message] = None
        self.view: Optional["GameBoardView"] = None

    @property
    def entities(self) -> Tuple[Entity, Entity]:
        return self._entities

    @property
    def current_entity(self) -> Entity:
        return self._entities[self.board.current_player]

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def content(self) -> MessageContent:
        return {
            "content": f"{self._entities[0].mention} vs {self._entities[1].mention}",
            "embed": create_gameboard_embed(self),
        }

    def emoji_for(self, player: int) -> str:
        return self.config.board_emojis[player]

    async def attach_to(self, message: discord.Message) -> None:
        """Start listening for moves on the board message."""
        self.message = message
        self.view = GameBoardView(self)
        await message.edit(view=self.view)

    async def play(self, interaction: discord.Interaction, position: int) -> None:
        """Play a move for the member who pressed a cell."""
        if self.finished:
            await interaction.response.defer()
            return
        if interaction.user.id != self.current_entity.id:
            await interaction.response.send_message("❌ It's not your turn!", ephemeral=True)
            return
        if not self.board.is_empty_cell(position):
            await interaction.response.send_message("❌ This cell is already taken!", ephemeral=True)
            return

        self.board.play(position)
        opponent = self.current_entity
        if not self.board.is_finished() and isinstance(opponent, AI):
            self.board.play(opponent.operate(self.board))

        if self.board.is_finished():
            self._finish(self._board_outcome())

        self.view.refresh()
        await interaction.response.edit_message(view=self.view, **self.content)

    async def expire(self) -> None:
        """End the game without a result after a period without moves."""
        if self.finished:
            return
        self._finish(GameOutcome.unresolved())
        await self.tunnel.end({
            "content": f"⌛ The game between {self._entities[0].mention} and {self._entities[1].mention} has expired.",
            "embed": None,
        })

    def _board_outcome(self) -> GameOutcome:
        winner = self.board.winner()
        if winner is None:
            return GameOutcome.tie()
        return GameOutcome.decisive(self._entities[winner])

    def _finish(self, outcome: GameOutcome) -> None:
        self.outcome = outcome
        if self.view is not None:
            self.view.stop()
        logger.info(
            "Game %s vs %s finished: %s",
            self._entities[0].id, self._entities[1].id, outcome.kind.value
        )
        self.manager.end_game(self, outcome)

    def winner_label(self) -> Optional[str]:
        if self.outcome is None or self.outcome.kind is OutcomeKind.UNRESOLVED:
            return None
        if self.outcome.kind is OutcomeKind.TIE:
            return "🤝 It's a tie!"
        return f"🏆 {self.outcome.winner.mention} wins!"


class CellButton(discord.ui.Button):
    """One cell of the board."""

    def __init__(self, position: int):
        super().__init__(style=discord.ButtonStyle.secondary, label=EMPTY_LABEL, row=position // Board.SIZE)
        self.position = position

    async def callback(self, interaction: discord.Interaction):
        await self.view.gameboard.play(interaction, self.position)


class GameBoardView(discord.ui.View):
    """Nine cell buttons mirroring the board."""

    def __init__(self, gameboard: GameBoard):
        super().__init__(timeout=gameboard.expire_time)
        self.gameboard = gameboard
        for position in range(len(gameboard.board.cells)):
            self.add_item(CellButton(position))
        self.refresh()

    def refresh(self) -> None:
        """Sync button labels and states with the board."""
        cells = self.gameboard.board.cells
        for button in self.children:
            owner = cells[button.position]
            if owner is None:
                button.emoji = None
                button.label = EMPTY_LABEL
                button.style = discord.ButtonStyle.secondary
            else:
                button.emoji = self.gameboard.emoji_for(owner)
                button.label = None
                button.style = discord.ButtonStyle.primary if owner == 0 else discord.ButtonStyle.danger
            button.disabled = owner is not None or self.gameboard.finished

    async def on_timeout(self):
        await self.gameboard.expire()
