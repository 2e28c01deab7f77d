# src/connect4/errors.py

from __future__ import annotations


class Connect4Error(Exception):
    """Base class for engine errors."""


class InvalidColumn(Connect4Error, ValueError):
    def __init__(self, col: int, cols: int) -> None:
        super().__init__(f"Column {col} out of range (0..{cols - 1}).")
        self.col = col
        self.cols = cols


class NoLegalMove(Connect4Error, ValueError):
    def __init__(self) -> None:
        super().__init__("No legal moves: the board is full.")
