from __future__ import annotations

from connect4.config import ROWS, COLS
from connect4.core.board import Board

# Full board with no four in a row anywhere (top row first)
DRAW_ROWS = [
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
]

# Same board with the top cell of the last column still open
NEARLY_FULL_ROWS = ["OOXXOO."] + DRAW_ROWS[1:]

# Draw board with the top two cells of columns 4..6 open
FEW_OPEN_ROWS = ["OOXX...", "XXOO..."] + DRAW_ROWS[2:]

MIDGAME_ROWS = [
    ".......",
    ".......",
    "...O...",
    "..XX...",
    "..OXO..",
    ".XOXO..",
]


def board(*rows: str) -> Board:
    """
    Board from the given rows (top first); missing top rows are empty.
    """
    lines = list(rows)
    return Board.from_rows(["." * COLS] * (ROWS - len(lines)) + lines)


def snapshot(b: Board) -> list:
    return [row[:] for row in b.grid]
