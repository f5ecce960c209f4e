from __future__ import annotations
from enum import Enum
from dataclasses import dataclass

class PlayerColor(Enum):
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "PlayerColor":
        return PlayerColor.WHITE if self == PlayerColor.BLACK else PlayerColor.BLACK

class Piece(Enum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @staticmethod
    def from_player(p: PlayerColor):
        return Piece.BLACK if p == PlayerColor.BLACK else Piece.WHITE

    @property
    def opponent(self) -> "Piece":
        if self == Piece.BLACK:
            return Piece.WHITE
        if self == Piece.WHITE:
            return Piece.BLACK
        return Piece.EMPTY

class GameMode(Enum):
    NORMAL = "normal"
    CHALLENGE = "challenge"

class Phase(Enum):
    AWAITING_PLAYER_MOVE = "awaiting_player_move"
    COMPUTER_THINKING = "computer_thinking"
    GAME_OVER = "game_over"

@dataclass(frozen=True)
class Position:
    row: int
    col: int

@dataclass(frozen=True)
class Move:
    player: PlayerColor
    pos: Position

    @property
    def row(self) -> int:
        return self.pos.row

    @property
    def col(self) -> int:
        return self.pos.col

class GameError(Exception):
    pass

class BoardIndexError(IndexError):
    """坐标越界：调用方违反约定，不做任何纠正。"""
    pass
