from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from connect4.ai.base import Agent
from connect4.core.board import Board
from connect4.core.rules import Coord, check_winner_with_line, is_draw
from connect4.game.state import GameState
from connect4.types import Move, other

logger = logging.getLogger(__name__)


def _agent_name(agent: Agent, fallback: str) -> str:
    name = getattr(agent, "name", None)
    if not name:
        return fallback
    return str(name)


def _empty_stats() -> Dict[str, Dict[str, int]]:
    return {
        p: {"moves": 0, "time_ms": 0, "nodes": 0, "cutoffs": 0, "random_moves": 0}
        for p in ("X", "O")
    }


@dataclass(slots=True)
class GameRecord:
    outcome: str  # "X", "O" or "D"
    moves: List[Move] = field(default_factory=list)
    stats: Dict[str, Dict[str, int]] = field(default_factory=_empty_stats)
    board: Optional[Board] = None
    win_line: List[Coord] = field(default_factory=list)


def seed_agent(agent: Agent, seed: int) -> None:
    rng = getattr(agent, "rng", None)
    if isinstance(rng, random.Random):
        rng.seed(seed)


def play_game(agent_x: Agent, agent_o: Agent, opening_moves: int = 0, seed: int = 0) -> GameRecord:
    """
    Play one game headlessly, X first, and return how it ended.

    The controller owns the board: agents only get to look at it through the
    state and answer with a column, which is applied here.
    """
    state = GameState(board=Board(), current="X")
    record = GameRecord(outcome="D", board=state.board)

    seed_agent(agent_x, seed + 101)
    seed_agent(agent_o, seed + 202)

    # Random opening so deterministic agents do not replay the same game
    rng = random.Random(seed)
    for _ in range(opening_moves):
        moves = state.board.valid_moves()
        if not moves:
            break
        move = rng.choice(moves)
        state.board.drop(move, state.current)
        record.moves.append(move)
        state.current = other(state.current)

    while True:
        won = check_winner_with_line(state.board)
        if won is not None:
            record.outcome, record.win_line = won
            break
        if is_draw(state.board):
            record.outcome = "D"
            break

        agent = agent_x if state.current == "X" else agent_o
        move = agent.choose_move(state)

        info = getattr(agent, "last_info", None) or {}
        side_stats = record.stats[state.current]
        side_stats["moves"] += 1
        side_stats["time_ms"] += max(1, int(info.get("time_ms", 0)))
        side_stats["nodes"] += int(info.get("nodes", 0))
        side_stats["cutoffs"] += int(info.get("cutoffs", 0))
        side_stats["random_moves"] += int(bool(info.get("random", False)))

        state.board.drop(move, state.current)
        record.moves.append(move)
        state.current = other(state.current)

    logger.debug(
        "%s (X) vs %s (O): %s after %d moves",
        _agent_name(agent_x, "Player X"), _agent_name(agent_o, "Player O"),
        record.outcome, len(record.moves),
    )
    return record

