from __future__ import annotations
from dataclasses import dataclass, field

from connect4.core.board import Board
from connect4.types import Player


@dataclass(slots=True)
class GameState:
    board: Board = field(default_factory=Board)
    current: Player = "X"
