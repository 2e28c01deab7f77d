from __future__ import annotations

from dataclasses import dataclass, field
import random

from connect4.errors import NoLegalMove
from connect4.game.state import GameState
from connect4.types import Move


@dataclass(slots=True)
class RandomAgent:
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)

    def choose_move(self, state: GameState) -> Move:
        moves = state.board.valid_moves()
        if not moves:
            raise NoLegalMove()
        return self.rng.choice(moves)
