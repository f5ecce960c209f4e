from __future__ import annotations
from typing import List, Optional
from .board import Board
from .models import PlayerColor, Position

class GameListener:
    """引擎对外事件：展示层按需覆盖，默认全部忽略。"""

    def board_changed(self, board: Board):
        pass

    def turn_changed(self, side: PlayerColor, is_computer_turn: bool):
        pass

    def game_ended(self, winner: Optional[PlayerColor], winning_line: List[Position]):
        """winner 为 None 表示平局，此时 winning_line 为空。"""
        pass

    def challenge_info_changed(self, level: int, difficulty_label: str):
        pass
