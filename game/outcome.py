"""Terminal outcomes of a gameboard."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from game.entity import Entity


class OutcomeKind(Enum):
    DECISIVE = "decisive"
    TIE = "tie"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class GameOutcome:
    """How a game ended.

    DECISIVE carries the winning entity, TIE means the board filled up
    and UNRESOLVED means the game stopped without a result (expiration).
    """
    kind: OutcomeKind
    winner: Optional[Entity] = None

    @classmethod
    def decisive(cls, winner: Entity) -> "GameOutcome":
        return cls(OutcomeKind.DECISIVE, winner)

    @classmethod
    def tie(cls) -> "GameOutcome":
        return cls(OutcomeKind.TIE)

    @classmethod
    def unresolved(cls) -> "GameOutcome":
        return cls(OutcomeKind.UNRESOLVED)
