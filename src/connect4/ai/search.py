from __future__ import annotations

import logging
import random
from concurrent.futures import Executor
from dataclasses import dataclass
from math import inf
from typing import List, Optional, Protocol, Sequence, Tuple

from connect4.ai.difficulty import Difficulty
from connect4.core.board import Board
from connect4.core.rules import terminal_score
from connect4.core.scoring import evaluate
from connect4.errors import NoLegalMove
from connect4.types import Move, Player, other

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[Move]) -> Move:
        ...


@dataclass(slots=True)
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0
    best_score: Optional[float] = None
    randomized: bool = False

    def merge(self, other_stats: "SearchStats") -> None:
        self.nodes += other_stats.nodes
        self.cutoffs += other_stats.cutoffs


def search(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    me: Player,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Depth-limited minimax with alpha-beta pruning, scored from `me`'s side.

    `maximizing` says whose turn it is: `me` when True, the opponent when
    False. Hypothetical moves are placed and removed in place; the board is
    unchanged when this returns.
    """
    if stats is not None:
        stats.nodes += 1

    # A finished game scores exactly, even at the depth limit.
    term = terminal_score(board, me)
    if term is not None:
        return term
    if depth == 0:
        return evaluate(board, me)

    to_play = me if maximizing else other(me)
    best = -inf if maximizing else inf

    for col in range(board.cols):
        row = board.lowest_empty_row(col)
        if row is None:
            continue

        board.place(row, col, to_play)
        score = search(board, depth - 1, alpha, beta, not maximizing, me, stats)
        board.remove(row, col)

        if maximizing:
            best = max(best, score)
            alpha = max(alpha, score)
        else:
            best = min(best, score)
            beta = min(beta, score)

        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break

    return best


def _score_root_move(board: Board, col: int, depth: int, me: Player) -> Tuple[float, SearchStats]:
    """
    Score one root column on a private board. Runs inside executor workers.
    """
    stats = SearchStats()
    row = board.lowest_empty_row(col)
    board.place(row, col, me)
    score = search(board, depth - 1, -inf, inf, False, me, stats)
    board.remove(row, col)
    return score, stats


def _root_scores(
    board: Board,
    moves: List[Move],
    depth: int,
    me: Player,
    stats: SearchStats,
    executor: Optional[Executor],
) -> List[float]:
    if executor is None:
        scores = []
        for col in moves:
            row = board.lowest_empty_row(col)
            board.place(row, col, me)
            scores.append(search(board, depth - 1, -inf, inf, False, me, stats))
            board.remove(row, col)
        return scores

    # each branch searches its own copy; combine only once every branch is done
    futures = [executor.submit(_score_root_move, board.copy(), int(col), depth, me) for col in moves]
    scores = []
    for fut in futures:
        score, branch_stats = fut.result()
        stats.merge(branch_stats)
        scores.append(score)
    return scores


def choose_move(
    board: Board,
    difficulty: Difficulty,
    me: Player,
    rng: Optional[RandomSource] = None,
    stats: Optional[SearchStats] = None,
    executor: Optional[Executor] = None,
) -> Move:
    """
    Pick a column for `me`.

    With probability `difficulty.random_factor` a uniformly random legal
    column is returned without searching. Otherwise every legal column is
    searched to `difficulty.depth` plies (counting the root move) and the
    first column with the highest score wins.
    """
    if rng is None:
        rng = random.Random()
    if stats is None:
        stats = SearchStats()

    moves = board.valid_moves()
    if not moves:
        raise NoLegalMove()

    if rng.random() < difficulty.random_factor:
        stats.randomized = True
        move = rng.choice(moves)
        logger.debug("%s plays random column %d (%s)", me, int(move), difficulty.name)
        return move

    scores = _root_scores(board, moves, difficulty.depth, me, stats, executor)

    best_col = Move(board.cols // 2)
    best_score = -inf
    for col, score in zip(moves, scores):
        if score > best_score:
            best_score = score
            best_col = col

    stats.best_score = best_score
    logger.debug(
        "%s plays column %d (%s): scores=%s nodes=%d cutoffs=%d",
        me, int(best_col), difficulty.name,
        dict(zip((int(m) for m in moves), scores)), stats.nodes, stats.cutoffs,
    )
    return best_col
