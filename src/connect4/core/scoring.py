from __future__ import annotations
from typing import Sequence

from connect4.core.board import Board
from connect4.core.rules import iter_windows
from connect4.types import Player, Cell, other

# Hand-tuned weights. Opponent threes weigh double our own threes so the
# engine leans toward blocking.
CENTER_WEIGHT = 3
FOUR_SCORE = 100
THREE_SCORE = 5
TWO_SCORE = 2
OPP_THREE_SCORE = -10


def score_window(cells: Sequence[Cell], me: Player) -> int:
    opp = other(me)

    p_count = sum(1 for v in cells if v == me)
    o_count = sum(1 for v in cells if v == opp)
    e_count = sum(1 for v in cells if v is None)

    # mixed window: both players present => no line potential
    if p_count > 0 and o_count > 0:
        return 0

    if p_count == 4:
        return FOUR_SCORE
    if p_count == 3 and e_count == 1:
        return THREE_SCORE
    if p_count == 2 and e_count == 2:
        return TWO_SCORE

    if o_count == 3 and e_count == 1:
        return OPP_THREE_SCORE

    return 0


def center_bonus(board: Board, me: Player) -> int:
    center = board.cols // 2
    return CENTER_WEIGHT * sum(1 for r in range(board.rows) if board.grid[r][center] == me)


def evaluate(board: Board, me: Player) -> int:
    """
    Heuristic value of a non-terminal position for `me`: centre column
    control plus the score of every four-cell window.
    """
    g = board.grid
    score = center_bonus(board, me)
    for window in iter_windows(board.rows, board.cols):
        score += score_window([g[r][c] for (r, c) in window], me)
    return score
