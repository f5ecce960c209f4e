from __future__ import annotations
import logging
import math
import random
from typing import Optional
from core.models import Position, Piece
from core.rules import is_five_in_a_row
from .base import BaseAI
from .evaluate import evaluate_position
from .random_ai import RandomGomokuAI

logger = logging.getLogger(__name__)

def find_winning_move(board, piece: Piece) -> Optional[Position]:
    """行优先扫描空位，返回第一个能让 piece 立即连五的位置。"""
    for pos in list(board.empty_cells()):
        with board.probe(pos, piece):
            won = is_five_in_a_row(board, pos, piece)
        if won:
            return pos
    return None

def best_move_by_evaluation(board, computer: Piece) -> Optional[Position]:
    # strictly greater: the first cell in row-major order keeps ties
    best = None
    best_score = -math.inf
    for pos in board.empty_cells():
        s = evaluate_position(board, pos, computer)
        if s > best_score:
            best_score = s
            best = pos
    return best

class HeuristicGomokuAI(BaseAI):
    """五子棋规则AI：难度随机 -> 必胜 -> 必防 -> 评估最高分。"""
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._random_ai = RandomGomokuAI(self.rng)

    def select_move(self, session) -> Optional[Position]:
        board = session.board
        computer = Piece.from_player(session.computer_stone)
        player = Piece.from_player(session.player_stone)
        setting = session.difficulty_setting

        if self.rng.random() < setting.randomness:
            pos = self._random_ai.select_move(session)
            logger.debug("random move %s (level %d)", pos, setting.level)
            return pos

        pos = find_winning_move(board, computer)
        if pos is not None:
            logger.debug("winning move %s", pos)
            return pos

        pos = find_winning_move(board, player)
        if pos is not None:
            logger.debug("blocking move %s", pos)
            return pos

        pos = best_move_by_evaluation(board, computer)
        logger.debug("evaluated move %s", pos)
        return pos
