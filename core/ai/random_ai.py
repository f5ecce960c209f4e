from __future__ import annotations
import random
from typing import Optional
from core.models import Position
from .base import BaseAI

class RandomGomokuAI(BaseAI):
    """五子棋随机AI：从空位中均匀随机选择。"""
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select_move(self, session) -> Optional[Position]:
        moves = self._legal_moves(session)
        if not moves:
            return None
        return self.rng.choice(moves)
