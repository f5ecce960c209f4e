from __future__ import annotations
import logging
import random
import threading
from typing import Iterable, List, Optional

from .ai.base import IGameAI
from .ai.gomoku_rule_ai import HeuristicGomokuAI
from .config import MAX_LEVEL, MIN_LEVEL, NORMAL_DIFFICULTY
from .difficulty import get_difficulty
from .events import GameListener
from .game import GameSession
from .models import PlayerColor, Position, Move, GameError, GameMode, Phase, BoardIndexError

logger = logging.getLogger(__name__)

class GameController:
    """
    人机对局控制器：接收外部请求，驱动 GameSession 的状态机并向监听者发出事件。

    The computer's reply is a deferred task. ``ai_delay`` selects how it runs:
    ``None`` keeps it pending until ``run_pending_computer_move()`` is called,
    ``<= 0`` runs it immediately, a positive value fires it from a timer thread.
    At most one task is pending; any restart or undo invalidates it.
    """

    def __init__(self, session: Optional[GameSession] = None, ai: Optional[IGameAI] = None,
                 rng: Optional[random.Random] = None, ai_delay: Optional[float] = None,
                 listeners: Iterable[GameListener] = ()):
        self.session = session or GameSession()
        self.rng = rng or random.Random()
        self.ai = ai or HeuristicGomokuAI(self.rng)
        self.ai_delay = ai_delay
        self._listeners: List[GameListener] = list(listeners)
        self._lock = threading.RLock()
        self._generation = 0
        self._pending: Optional[int] = None
        self._timer: Optional[threading.Timer] = None
        with self._lock:
            self._start()

    # ---------- 监听者 ----------
    def add_listener(self, listener: GameListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: GameListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str, *args):
        for listener in list(self._listeners):
            try:
                getattr(listener, event)(*args)
            except Exception:
                logger.exception("listener %r failed on %s", listener, event)

    # ---------- 状态 ----------
    @property
    def phase(self) -> Phase:
        return self.session.phase

    @property
    def has_pending_computer_move(self) -> bool:
        return self._pending is not None

    @property
    def can_advance_level(self) -> bool:
        s = self.session
        return (s.mode == GameMode.CHALLENGE and s.ended and s.winner == s.player_stone
                and s.challenge_level < MAX_LEVEL)

    @property
    def challenge_complete(self) -> bool:
        s = self.session
        return (s.mode == GameMode.CHALLENGE and s.ended and s.winner == s.player_stone
                and s.challenge_level == MAX_LEVEL)

    # ---------- 外部请求 ----------
    def request_new_game(self):
        with self._lock:
            self._start()

    def request_restart(self):
        with self._lock:
            self._start()

    def request_player_move(self, row: int, col: int) -> bool:
        with self._lock:
            s = self.session
            pos = Position(row, col)
            if not s.board.in_bounds(pos):
                raise BoardIndexError(f"坐标越界: ({row}, {col})")
            if s.phase != Phase.AWAITING_PLAYER_MOVE:
                logger.debug("move %s rejected in phase %s", pos, s.phase.name)
                return False
            try:
                s.step(Move(player=s.player_stone, pos=pos))
            except GameError as e:
                logger.debug("move %s rejected: %s", pos, e)
                return False
            self._after_move()
            return True

    def request_undo(self) -> bool:
        with self._lock:
            if not self.session.undo():
                logger.debug("nothing to undo")
                return False
            self._cancel_pending()
            s = self.session
            self._emit("board_changed", s.board.clone())
            self._emit("turn_changed", s.current, False)
            return True

    def request_next_level(self) -> bool:
        with self._lock:
            s = self.session
            if s.mode != GameMode.CHALLENGE or s.challenge_level >= MAX_LEVEL:
                return False
            s.challenge_level += 1
            s.difficulty = s.challenge_level
            logger.info("advancing to challenge level %d", s.challenge_level)
            self._start()
            return True

    def set_mode(self, mode: GameMode):
        with self._lock:
            s = self.session
            s.mode = mode
            if mode == GameMode.CHALLENGE:
                # 闯关固定执黑先行，从第一关开始
                s.challenge_level = MIN_LEVEL
                s.difficulty = MIN_LEVEL
                s.set_player_color(PlayerColor.BLACK)
            else:
                s.difficulty = NORMAL_DIFFICULTY
            logger.info("mode set to %s", mode.value)
            self._start()

    def set_player_color(self, color: PlayerColor) -> bool:
        with self._lock:
            s = self.session
            if s.mode == GameMode.CHALLENGE:
                return False
            s.set_player_color(color)
            self._start()
            return True

    def set_difficulty(self, level: int) -> bool:
        with self._lock:
            s = self.session
            if s.mode == GameMode.CHALLENGE:
                return False
            get_difficulty(level)
            s.difficulty = level
            return True

    def run_pending_computer_move(self) -> Optional[Position]:
        with self._lock:
            if self._pending is None:
                return None
            return self._computer_move(self._pending)

    def shutdown(self):
        with self._lock:
            self._cancel_pending()

    # ---------- 内部流程 ----------
    def _start(self):
        self._cancel_pending()
        s = self.session
        s.reset()
        logger.info("new game: mode=%s level=%d difficulty=%d player=%s",
                    s.mode.value, s.challenge_level, s.difficulty, s.player_stone.name)
        self._emit("board_changed", s.board.clone())
        if s.mode == GameMode.CHALLENGE:
            self._emit("challenge_info_changed", s.challenge_level, s.difficulty_setting.label)
        self._emit("turn_changed", s.current, s.is_computer_turn)
        if s.phase == Phase.COMPUTER_THINKING:
            self._schedule_computer_move()

    def _after_move(self):
        s = self.session
        self._emit("board_changed", s.board.clone())
        if s.ended:
            self._emit("game_ended", s.winner, list(s.winning_line))
            return
        self._emit("turn_changed", s.current, s.is_computer_turn)
        if s.phase == Phase.COMPUTER_THINKING:
            self._schedule_computer_move()

    def _cancel_pending(self):
        self._generation += 1
        self._pending = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule_computer_move(self):
        self._cancel_pending()
        token = self._generation
        self._pending = token
        if self.ai_delay is None:
            return
        if self.ai_delay <= 0:
            self._computer_move(token)
            return
        self._timer = threading.Timer(self.ai_delay, self._computer_move, args=(token,))
        self._timer.daemon = True
        self._timer.start()

    def _computer_move(self, token: int) -> Optional[Position]:
        with self._lock:
            if self._pending != token:
                logger.debug("discarding stale computer move task %d", token)
                return None
            self._pending = None
            self._timer = None
            s = self.session
            if s.phase != Phase.COMPUTER_THINKING:
                return None
            pos = self.ai.select_move(s)
            if pos is None:
                s.declare_draw()
                self._emit("board_changed", s.board.clone())
                self._emit("game_ended", None, [])
                return None
            s.step(Move(player=s.computer_stone, pos=pos))
            logger.debug("computer played %s", pos)
            self._after_move()
            return pos
