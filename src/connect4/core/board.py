# src/connect4/core/board.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from connect4.config import ROWS, COLS
from connect4.errors import InvalidColumn
from connect4.types import Cell, Player, Move

_CHARS = {".": None, "X": "X", "O": "O"}


@dataclass(slots=True)
class Board:
    """
    Grid of cells indexed grid[row][col], row 0 at the bottom.

    Pieces only ever go to the lowest empty row of a column, so every column
    is filled contiguously from row 0 upward.
    """
    rows: int = ROWS
    cols: int = COLS
    grid: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.grid:
            self.grid = [[None for _ in range(self.cols)] for _ in range(self.rows)]
        elif len(self.grid) != self.rows or any(len(r) != self.cols for r in self.grid):
            raise ValueError(f"Grid must be {self.rows}x{self.cols}.")

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board from text rows, top row first ('.', 'X' or 'O' per cell).
        """
        n_rows = len(rows)
        n_cols = len(rows[0]) if rows else 0
        if n_rows == 0 or n_cols == 0:
            raise ValueError("Board text is empty.")
        if (n_rows, n_cols) != (ROWS, COLS):
            raise ValueError(f"Board must be {ROWS}x{COLS}, got {n_rows}x{n_cols}.")

        grid: List[List[Cell]] = []
        for line in reversed(rows):
            if len(line) != n_cols:
                raise ValueError("Board rows must all have the same length.")
            try:
                grid.append([_CHARS[ch] for ch in line.upper()])
            except KeyError as e:
                raise ValueError(f"Invalid cell {e.args[0]!r}; use '.', 'X' or 'O'.") from None

        for c in range(n_cols):
            seen_empty = False
            for r in range(n_rows):
                if grid[r][c] is None:
                    seen_empty = True
                elif seen_empty:
                    raise ValueError(f"Column {c} has a floating piece at row {r}.")

        return cls(n_rows, n_cols, grid)

    def to_rows(self) -> List[str]:
        return ["".join(p or "." for p in self.grid[r]) for r in range(self.rows - 1, -1, -1)]

    def __str__(self) -> str:
        return "\n".join(self.to_rows())

    def copy(self) -> "Board":
        return Board(self.rows, self.cols, [row[:] for row in self.grid])

    def _check_col(self, col: int) -> int:
        c = int(col)
        if c < 0 or c >= self.cols:
            raise InvalidColumn(c, self.cols)
        return c

    def lowest_empty_row(self, col: int) -> Optional[int]:
        c = self._check_col(col)
        for r in range(self.rows):
            if self.grid[r][c] is None:
                return r
        return None

    def place(self, row: int, col: int, player: Player) -> None:
        self.grid[row][self._check_col(col)] = player

    def remove(self, row: int, col: int) -> None:
        self.grid[row][self._check_col(col)] = None

    def valid_moves(self) -> List[Move]:
        top = self.grid[self.rows - 1]
        return [Move(c) for c in range(self.cols) if top[c] is None]

    def is_full(self) -> bool:
        return all(p is not None for p in self.grid[self.rows - 1])

    def drop(self, col: Move, player: Player) -> int:
        r = self.lowest_empty_row(col)
        if r is None:
            raise ValueError("Column is full.")
        self.grid[r][int(col)] = player
        return r
