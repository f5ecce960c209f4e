from __future__ import annotations
from typing import List, Optional
from .config import WIN_LENGTH
from .models import Position, Piece

# horizontal, vertical, diagonal-down, diagonal-up; order decides which line is reported
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]

def find_five_in_a_row(board, p: Position, piece: Piece) -> Optional[List[Position]]:
    """Return the stones of the first run through ``p`` reaching WIN_LENGTH, or None."""
    size = board.size
    for dr, dc in DIRECTIONS:
        stones = [p]
        # forward
        r, c = p.row + dr, p.col + dc
        while 0 <= r < size and 0 <= c < size and board.grid[r][c] == piece:
            stones.append(Position(r, c))
            r += dr
            c += dc
        # backward
        r, c = p.row - dr, p.col - dc
        while 0 <= r < size and 0 <= c < size and board.grid[r][c] == piece:
            stones.append(Position(r, c))
            r -= dr
            c -= dc
        if len(stones) >= WIN_LENGTH:
            return stones
    return None

def is_five_in_a_row(board, p: Position, piece: Piece) -> bool:
    return find_five_in_a_row(board, p, piece) is not None
