"""Game participant definitions."""

from typing import Protocol, Union


class Entity(Protocol):
    """Anything that can take a seat at a gameboard.

    ``discord.Member`` satisfies this protocol as-is; AI opponents
    implement it in ``game.ai``.
    """
    id: Union[int, str]

    @property
    def display_name(self) -> str: ...

    @property
    def mention(self) -> str: ...

