from __future__ import annotations
from typing import Optional, Tuple, List
import random
import time

from core.config import AI_DELAY
from core.controller import GameController
from core.events import GameListener
from core.models import PlayerColor, Position, GameMode
from .renderer import ImageRenderer

MODE_LABELS = {"普通模式": GameMode.NORMAL, "闯关模式": GameMode.CHALLENGE}
COLOR_LABELS = {"黑子": PlayerColor.BLACK, "白子": PlayerColor.WHITE}

class UIController(GameListener):
    """gradio 事件 -> GameController 请求；监听引擎事件生成提示文字。"""

    def __init__(self, ai_delay: float = AI_DELAY, seed: Optional[int] = None):
        self.renderer = ImageRenderer()
        self.ai_delay = ai_delay
        self.message = "Welcome to Gomoku"
        self.challenge_text = ""
        self._popup: Optional[str] = None
        self.move_accepted = False
        # 电脑落子由 computer_turn() 在界面刷新后触发
        self.engine = GameController(rng=random.Random(seed), ai_delay=None, listeners=[self])

    @property
    def session(self):
        return self.engine.session

    # ---------- 引擎事件 ----------
    def turn_changed(self, side: PlayerColor, is_computer_turn: bool):
        self.message = "Computer thinking..." if is_computer_turn else "Your turn"

    def game_ended(self, winner: Optional[PlayerColor], winning_line: List[Position]):
        s = self.session
        if winner is None:
            self.message = "End: Draw"
            self._popup = "🤝 平局！"
            return
        self.message = f"End: {'Black' if winner == PlayerColor.BLACK else 'White'} wins"
        if winner == s.player_stone:
            text = "🎉 恭喜你获胜！"
            if self.engine.can_advance_level:
                text += f" 准备挑战第 {s.challenge_level + 1} 关？"
            elif self.engine.challenge_complete:
                text = "🏆 恭喜！你已征服所有关卡，成为五子棋大师！"
        else:
            text = "💻 电脑获胜！"
            if s.mode == GameMode.CHALLENGE:
                text += f" 再试一次第 {s.challenge_level} 关？"
        self._popup = text

    def challenge_info_changed(self, level: int, difficulty_label: str):
        self.challenge_text = f"第 {level} 关 | {difficulty_label}"

    # ---------- 渲染 ----------
    def get_image(self):
        s = self.session
        return self.renderer.render(s, self.message, None if s.ended else s.current)

    def info_text(self) -> str:
        s = self.session
        if s.mode == GameMode.CHALLENGE:
            return f"闯关模式：{self.challenge_text}"
        player = "黑子" if s.player_stone == PlayerColor.BLACK else "白子"
        computer = "白子" if s.player_stone == PlayerColor.BLACK else "黑子"
        return f"玩家 ({player}) vs 电脑 ({computer}) | {s.difficulty_setting.label}"

    def _result(self) -> Tuple[object, Optional[str]]:
        popup, self._popup = self._popup, None
        return self.get_image(), popup

    # ---------- 交互 ----------
    def click_canvas(self, evt) -> Tuple[object, Optional[str]]:
        self.move_accepted = False
        pos = self.renderer.coord_from_xy(evt.index[0], evt.index[1], self.session.board)
        if pos is None:
            self.message = "Please click near a grid intersection"
            return self.get_image(), "请点击靠近网格交点的位置"
        # 状态文字由引擎事件 turn_changed / game_ended 维护
        if self.engine.request_player_move(pos.row, pos.col):
            self.move_accepted = True
            return self._result()
        if self.session.ended:
            return self.get_image(), "对局已结束，请开启新对局。"
        if self.session.is_computer_turn:
            return self.get_image(), "电脑思考中，请稍候"
        return self.get_image(), "该位置已有棋子"

    def computer_turn(self) -> Tuple[object, Optional[str]]:
        if not self.engine.has_pending_computer_move:
            return self._result()
        time.sleep(self.ai_delay)
        pos = self.engine.run_pending_computer_move()
        if pos is not None and not self.session.ended:
            self.message = f"Computer: {pos.row},{pos.col} | Your turn"
        return self._result()

    def new_game(self):
        self.engine.request_new_game()
        return self._result()

    def restart(self):
        self.engine.request_restart()
        return self._result()

    def undo(self):
        ok = self.engine.request_undo()
        if not ok:
            return self.get_image(), "无棋可悔"
        self.message = "Undo"
        return self.get_image(), "悔棋成功"

    def next_level(self):
        if not self.engine.can_advance_level:
            return self.get_image(), "请先赢下本关"
        self.engine.request_next_level()
        return self._result()

    def set_mode(self, label: str):
        self.engine.set_mode(MODE_LABELS[label])
        return self._result()

    def set_player_color(self, label: str):
        if not self.engine.set_player_color(COLOR_LABELS[label]):
            return self.get_image(), "闯关模式固定执黑先行"
        return self._result()

    def set_difficulty(self, level: int):
        if not self.engine.set_difficulty(int(level)):
            return self.get_image(), "闯关模式下难度由关卡决定"
        return self.get_image(), f"AI级别：{self.session.difficulty_setting.label}"

    def player_color_label(self) -> str:
        return "黑子" if self.session.player_stone == PlayerColor.BLACK else "白子"
