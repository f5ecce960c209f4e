from __future__ import annotations
from typing import List, Optional
from core.models import Position

class IGameAI:
    """通用AI接口：给定 session，返回选择的Position；棋盘已满时返回 None。"""
    def select_move(self, session) -> Optional[Position]:
        raise NotImplementedError

class BaseAI(IGameAI):
    """提供通用工具的AI基类。"""
    def select_move(self, session) -> Optional[Position]:
        raise NotImplementedError

    def _legal_moves(self, session) -> List[Position]:
        # 五子棋：所有空位均合法，按行优先顺序
        return list(session.board.empty_cells())
