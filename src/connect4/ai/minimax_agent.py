from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Optional
import random
import time

from connect4.ai.difficulty import Difficulty, get_difficulty
from connect4.ai.search import SearchStats, choose_move
from connect4.config import DEFAULT_DIFFICULTY
from connect4.game.state import GameState
from connect4.types import Move


@dataclass(slots=True)
class MinimaxAgent:
    name: str = "Minimax AI"
    difficulty: Difficulty = field(default_factory=lambda: get_difficulty(DEFAULT_DIFFICULTY))
    rng: random.Random = field(default_factory=random.Random)
    executor: Optional[Executor] = None

    # Stats for the last move
    last_info: dict = field(default_factory=dict)

    def choose_move(self, state: GameState) -> Move:
        stats = SearchStats()

        start = time.perf_counter()
        move = choose_move(state.board, self.difficulty, state.current, self.rng, stats, self.executor)
        elapsed = time.perf_counter() - start

        self.last_info = {
            "difficulty": self.difficulty.name,
            "depth": 0 if stats.randomized else self.difficulty.depth,
            "nodes": stats.nodes,
            "cutoffs": stats.cutoffs,
            "eval": None if stats.best_score is None else int(stats.best_score),
            "move_col": int(move) + 1,
            "time_ms": max(1, int(elapsed * 1000)),
            "random": stats.randomized,
        }

        return move
