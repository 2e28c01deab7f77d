from __future__ import annotations
from functools import lru_cache
from typing import Optional, List, Tuple

from connect4.config import CONNECT_N
from connect4.core.board import Board
from connect4.types import Player, PLAYERS, other

Coord = Tuple[int, int]  # (row, col)
Window = Tuple[Coord, ...]

WIN_SCORE = 1000
LOSS_SCORE = -1000
DRAW_SCORE = 0


@lru_cache(maxsize=None)
def iter_windows(rows: int, cols: int) -> Tuple[Window, ...]:
    """
    Every run of CONNECT_N cells on a rows x cols grid, in all four orientations.
    """
    n = CONNECT_N
    out: List[Window] = []

    # Horizontal
    for r in range(rows):
        for c in range(cols - n + 1):
            out.append(tuple((r, c + i) for i in range(n)))

    # Vertical
    for r in range(rows - n + 1):
        for c in range(cols):
            out.append(tuple((r + i, c) for i in range(n)))

    # Diagonal up-right
    for r in range(rows - n + 1):
        for c in range(cols - n + 1):
            out.append(tuple((r + i, c + i) for i in range(n)))

    # Diagonal down-right
    for r in range(n - 1, rows):
        for c in range(cols - n + 1):
            out.append(tuple((r - i, c + i) for i in range(n)))

    return tuple(out)


def has_four_in_row(board: Board, player: Player) -> bool:
    g = board.grid
    for window in iter_windows(board.rows, board.cols):
        if all(g[r][c] == player for (r, c) in window):
            return True
    return False


def check_winner_with_line(board: Board) -> Optional[Tuple[Player, List[Coord]]]:
    g = board.grid
    for window in iter_windows(board.rows, board.cols):
        r0, c0 = window[0]
        p = g[r0][c0]
        if p and all(g[r][c] == p for (r, c) in window[1:]):
            return p, list(window)
    return None


def check_winner(board: Board) -> Optional[Player]:
    for p in PLAYERS:
        if has_four_in_row(board, p):
            return p
    return None


def is_draw(board: Board) -> bool:
    return board.is_full() and check_winner(board) is None


def terminal_score(board: Board, me: Player) -> Optional[int]:
    """
    Exact score of a finished position from `me`'s point of view, or None if
    the game is still going.
    """
    if has_four_in_row(board, me):
        return WIN_SCORE
    if has_four_in_row(board, other(me)):
        return LOSS_SCORE
    if board.is_full():
        return DRAW_SCORE
    return None
