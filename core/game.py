from __future__ import annotations
import logging
from typing import List, Optional
from .config import BOARD_SIZE, DEFAULT_DIFFICULTY, MIN_LEVEL
from .models import PlayerColor, Piece, Position, Move, GameError, GameMode, Phase
from .board import Board
from .difficulty import DifficultyLevel, get_difficulty
from .rules import find_five_in_a_row

logger = logging.getLogger(__name__)

class GameSession:
    """一局五子棋的全部状态：棋盘、轮次、历史以及模式/难度/执子配置。"""

    def __init__(self, size: int = BOARD_SIZE, mode: GameMode = GameMode.NORMAL,
                 player_color: PlayerColor = PlayerColor.BLACK,
                 difficulty: int = DEFAULT_DIFFICULTY, challenge_level: int = MIN_LEVEL):
        get_difficulty(difficulty)
        get_difficulty(challenge_level)
        self.board = Board(size)
        self.mode = mode
        self.challenge_level = challenge_level
        self.difficulty = difficulty
        self.player_stone = PlayerColor.BLACK
        self.computer_stone = PlayerColor.WHITE
        self.player_starts = True
        self.set_player_color(player_color)

        self.current = PlayerColor.BLACK
        self.history: List[Move] = []
        self.ended: bool = False
        self._winner: Optional[PlayerColor] = None
        self.winning_line: List[Position] = []
        self.last_pos: Optional[Position] = None
        self.phase = Phase.AWAITING_PLAYER_MOVE
        self.reset()

    @property
    def winner(self):
        return self._winner

    @property
    def difficulty_setting(self) -> DifficultyLevel:
        return get_difficulty(self.difficulty)

    @property
    def is_computer_turn(self) -> bool:
        return not self.ended and self.current == self.computer_stone

    def set_player_color(self, color: PlayerColor):
        # 黑子先行
        self.player_stone = color
        self.computer_stone = color.opponent
        self.player_starts = color == PlayerColor.BLACK

    def reset(self):
        self.board.reset()
        self.history.clear()
        self.ended = False
        self._winner = None
        self.winning_line = []
        self.last_pos = None
        if self.player_starts:
            self.current = self.player_stone
            self.phase = Phase.AWAITING_PLAYER_MOVE
        else:
            self.current = self.computer_stone
            self.phase = Phase.COMPUTER_THINKING

    def step(self, move: Move):
        if self.ended:
            raise GameError("对局已结束")
        if move.player != self.current:
            raise GameError("未到该方行棋")
        if not self.board.is_empty(move.pos):
            raise GameError("该位置已有棋子")
        self.apply_move(move)

    def apply_move(self, move: Move):
        p = move.pos
        piece = Piece.from_player(move.player)
        self.board.set(p, piece)
        self.history.append(move)
        self.last_pos = p
        # Check end
        line = find_five_in_a_row(self.board, p, piece)
        if line is not None:
            self.ended = True
            self._winner = move.player
            self.winning_line = line
        elif self.board.is_full():
            self.ended = True
            self._winner = None
        if self.ended:
            self.phase = Phase.GAME_OVER
            logger.info("game over after %d moves, winner=%s", len(self.history),
                        self._winner.name if self._winner else "draw")
            return
        # Switch
        self.current = move.player.opponent
        self.phase = Phase.COMPUTER_THINKING if self.current == self.computer_stone else Phase.AWAITING_PLAYER_MOVE

    def declare_draw(self):
        # AI 无处可下：棋盘已满
        self.ended = True
        self._winner = None
        self.winning_line = []
        self.phase = Phase.GAME_OVER

    def undo(self, count: int = 2) -> bool:
        """Take back the last ``count`` moves (computer's reply and the player's move).

        Called while the computer is still to reply, the two moves popped are the
        player's latest move and the computer's previous reply. The player's
        earlier stone stays on the board and the player moves again.
        """
        if self.ended or len(self.history) < count:
            return False
        for _ in range(count):
            last = self.history.pop()
            self.board.set(last.pos, Piece.EMPTY)
        self.last_pos = self.history[-1].pos if self.history else None
        self.current = self.player_stone
        self.phase = Phase.AWAITING_PLAYER_MOVE
        return True
