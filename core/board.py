from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, List
from .config import BOARD_SIZE, MIN_BOARD_SIZE, MAX_BOARD_SIZE
from .models import Piece, Position, BoardIndexError

class Board:
    def __init__(self, size: int = BOARD_SIZE):
        if size < MIN_BOARD_SIZE or size > MAX_BOARD_SIZE:
            raise ValueError(f"棋盘大小需在 {MIN_BOARD_SIZE}~{MAX_BOARD_SIZE} 之间")
        self.size = size
        self.grid: List[List[Piece]] = [[Piece.EMPTY for _ in range(size)] for _ in range(size)]

    def clone(self) -> "Board":
        b = Board(self.size)
        for r in range(self.size):
            for c in range(self.size):
                b.grid[r][c] = self.grid[r][c]
        return b

    def in_bounds(self, p: Position) -> bool:
        return 0 <= p.row < self.size and 0 <= p.col < self.size

    def _check(self, p: Position):
        # negative indices would silently wrap in a list, so reject them explicitly
        if not self.in_bounds(p):
            raise BoardIndexError(f"坐标越界: ({p.row}, {p.col}) 不在 0~{self.size - 1} 之内")

    def get(self, p: Position) -> Piece:
        self._check(p)
        return self.grid[p.row][p.col]

    def set(self, p: Position, piece: Piece):
        self._check(p)
        self.grid[p.row][p.col] = piece

    def is_empty(self, p: Position) -> bool:
        return self.get(p) == Piece.EMPTY

    def is_full(self) -> bool:
        return all(cell != Piece.EMPTY for row in self.grid for cell in row)

    def reset(self):
        for r in range(self.size):
            for c in range(self.size):
                self.grid[r][c] = Piece.EMPTY

    def empty_cells(self) -> Iterator[Position]:
        """Row-major order; callers rely on it for reproducible scans."""
        for r in range(self.size):
            for c in range(self.size):
                if self.grid[r][c] == Piece.EMPTY:
                    yield Position(r, c)

    @contextmanager
    def probe(self, p: Position, piece: Piece):
        """Hypothetically place ``piece`` at an empty cell; the cell is emptied again on exit."""
        if not self.is_empty(p):
            raise ValueError(f"无法在已占用的位置试探: ({p.row}, {p.col})")
        self.grid[p.row][p.col] = piece
        try:
            yield self
        finally:
            self.grid[p.row][p.col] = Piece.EMPTY

    def to_array(self):
        return [[self.grid[r][c].value for c in range(self.size)] for r in range(self.size)]

    @staticmethod
    def from_array(arr) -> "Board":
        size = len(arr)
        b = Board(size)
        for r in range(size):
            for c in range(size):
                val = arr[r][c]
                b.grid[r][c] = Piece(val)
        return b
