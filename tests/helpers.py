from core.board import Board
from core.models import Piece, Position


def place(board, piece, *cells):
    for r, c in cells:
        board.set(Position(r, c), piece)
    return board


def draw_pattern(size):
    """Full board with no run longer than two in any direction."""
    board = Board(size)
    for r in range(size):
        for c in range(size):
            board.grid[r][c] = Piece.BLACK if (c // 2 + r) % 2 == 0 else Piece.WHITE
    return board
