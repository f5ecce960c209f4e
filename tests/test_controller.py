import random
import threading
import time

import pytest

from core.ai.base import IGameAI
from core.controller import GameController
from core.events import GameListener
from core.game import GameSession
from core.models import BoardIndexError, GameMode, Phase, Piece, PlayerColor, Position

from helpers import draw_pattern


class Recorder(GameListener):
    def __init__(self):
        self.events = []

    def board_changed(self, board):
        self.events.append(("board", board.to_array()))

    def turn_changed(self, side, is_computer_turn):
        self.events.append(("turn", side, is_computer_turn))

    def game_ended(self, winner, winning_line):
        self.events.append(("end", winner, {(p.row, p.col) for p in winning_line}))

    def challenge_info_changed(self, level, difficulty_label):
        self.events.append(("challenge", level, difficulty_label))

    def named(self, name):
        return [e for e in self.events if e[0] == name]


class ScriptedAI(IGameAI):
    def __init__(self, *cells):
        self.moves = [Position(r, c) for r, c in cells]

    def select_move(self, session):
        return self.moves.pop(0)


def _controller(ai=None, ai_delay=None, **session_kwargs):
    session_kwargs.setdefault("difficulty", 10)
    rec = Recorder()
    ctl = GameController(GameSession(**session_kwargs), ai=ai, rng=random.Random(7),
                         ai_delay=ai_delay, listeners=[rec])
    return ctl, rec


def test_start_announces_board_and_turn():
    ctl, rec = _controller()
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE
    assert not ctl.has_pending_computer_move
    assert rec.named("turn") == [("turn", PlayerColor.BLACK, False)]
    assert len(rec.named("board")) == 1
    assert rec.named("challenge") == []


def test_player_move_then_pending_computer_move():
    ctl, rec = _controller()
    assert ctl.request_player_move(7, 7)
    assert ctl.phase == Phase.COMPUTER_THINKING
    assert ctl.has_pending_computer_move
    assert rec.events[-1] == ("turn", PlayerColor.WHITE, True)

    pos = ctl.run_pending_computer_move()
    assert pos is not None
    assert ctl.session.board.get(pos) == Piece.WHITE
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE
    assert not ctl.has_pending_computer_move
    assert len(ctl.session.history) == 2
    assert rec.events[-1] == ("turn", PlayerColor.BLACK, False)
    assert ctl.run_pending_computer_move() is None


def test_invalid_moves_are_ignored():
    ctl, rec = _controller()
    assert ctl.request_player_move(7, 7)
    # computer's turn
    assert not ctl.request_player_move(0, 0)
    ctl.run_pending_computer_move()
    # occupied
    count = len(rec.events)
    assert not ctl.request_player_move(7, 7)
    assert len(ctl.session.history) == 2
    assert len(rec.events) == count


def test_out_of_bounds_is_a_programming_error():
    ctl, _ = _controller()
    with pytest.raises(BoardIndexError):
        ctl.request_player_move(15, 0)
    with pytest.raises(IndexError):
        ctl.request_player_move(-1, 3)


def test_computer_opens_when_player_is_white():
    ctl, rec = _controller(player_color=PlayerColor.WHITE)
    assert ctl.phase == Phase.COMPUTER_THINKING
    assert rec.named("turn") == [("turn", PlayerColor.BLACK, True)]
    assert ctl.run_pending_computer_move() == Position(7, 7)
    assert ctl.session.board.get(Position(7, 7)) == Piece.BLACK
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE


def test_player_wins():
    ai = ScriptedAI((0, 0), (0, 1), (0, 2), (0, 3))
    ctl, rec = _controller(ai=ai, ai_delay=0)
    for col in range(3, 8):
        assert ctl.request_player_move(7, col)
    s = ctl.session
    assert ctl.phase == Phase.GAME_OVER
    assert s.winner == PlayerColor.BLACK
    assert rec.named("end") == [("end", PlayerColor.BLACK, {(7, c) for c in range(3, 8)})]
    assert not ctl.has_pending_computer_move
    assert not ctl.request_player_move(10, 10)
    assert not ctl.request_undo()


def test_computer_wins():
    ai = ScriptedAI((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))
    ctl, rec = _controller(ai=ai, ai_delay=0)
    for col in range(5):
        ctl.request_player_move(10, col * 2)
    assert ctl.session.winner == PlayerColor.WHITE
    assert rec.named("end")[0][1] == PlayerColor.WHITE


def test_full_board_is_a_draw():
    ctl, rec = _controller()
    s = ctl.session
    s.board = draw_pattern(15)
    s.board.grid[0][0] = Piece.EMPTY
    assert ctl.request_player_move(0, 0)
    assert ctl.phase == Phase.GAME_OVER
    assert s.winner is None
    assert rec.named("end") == [("end", None, set())]


def test_computer_facing_full_board_declares_draw():
    ctl, rec = _controller()
    ctl.request_player_move(7, 7)
    s = ctl.session
    s.board = draw_pattern(15)
    assert ctl.run_pending_computer_move() is None
    assert ctl.phase == Phase.GAME_OVER
    assert rec.named("end") == [("end", None, set())]


def test_undo_restores_player_turn():
    ctl, rec = _controller()
    ctl.request_player_move(7, 7)
    ctl.run_pending_computer_move()
    before = ctl.session.board.to_array()
    ctl.request_player_move(3, 3)
    ctl.run_pending_computer_move()
    assert ctl.request_undo()
    assert ctl.session.board.to_array() == before
    assert len(ctl.session.history) == 2
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE
    assert rec.events[-1] == ("turn", PlayerColor.BLACK, False)


def test_undo_with_fewer_than_two_moves_changes_nothing():
    ctl, rec = _controller()
    assert not ctl.request_undo()
    ctl.request_player_move(7, 7)
    count = len(rec.events)
    assert not ctl.request_undo()
    assert not ctl.request_undo()
    assert len(ctl.session.history) == 1
    assert ctl.has_pending_computer_move
    assert len(rec.events) == count


def test_undo_cancels_pending_computer_move():
    ctl, _ = _controller()
    ctl.request_player_move(7, 7)
    ctl.run_pending_computer_move()
    ctl.request_player_move(6, 6)
    assert ctl.has_pending_computer_move
    assert ctl.request_undo()
    assert not ctl.has_pending_computer_move
    assert ctl.run_pending_computer_move() is None
    assert len(ctl.session.history) == 1


def test_new_game_cancels_pending_computer_move():
    ctl, _ = _controller()
    ctl.request_player_move(7, 7)
    ctl.request_new_game()
    assert not ctl.has_pending_computer_move
    assert ctl.run_pending_computer_move() is None
    assert ctl.session.history == []
    assert ctl.session.board.is_empty(Position(7, 7))


def test_timer_delivers_computer_move():
    ctl, _ = _controller(ai_delay=0.05)
    replied = threading.Event()

    class Waiter(GameListener):
        def turn_changed(self, side, is_computer_turn):
            if not is_computer_turn:
                replied.set()

    ctl.add_listener(Waiter())
    ctl.request_player_move(7, 7)
    assert replied.wait(5)
    assert len(ctl.session.history) == 2
    ctl.shutdown()


def test_stale_timer_never_lands():
    ctl, _ = _controller(ai_delay=0.2)
    ctl.request_player_move(7, 7)
    ctl.request_restart()
    time.sleep(0.4)
    assert ctl.session.history == []
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE
    ctl.shutdown()


def test_synchronous_reply():
    ctl, _ = _controller(ai_delay=0)
    ctl.request_player_move(7, 7)
    assert len(ctl.session.history) == 2
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE


def test_challenge_mode_progression():
    ctl, rec = _controller(player_color=PlayerColor.WHITE)
    ctl.set_mode(GameMode.CHALLENGE)
    s = ctl.session
    assert s.challenge_level == 1
    assert s.difficulty == 1
    assert s.player_stone == PlayerColor.BLACK
    assert ctl.phase == Phase.AWAITING_PLAYER_MOVE
    assert rec.named("challenge") == [("challenge", 1, "菜鸟级 AI")]
    assert not ctl.set_player_color(PlayerColor.WHITE)
    assert not ctl.set_difficulty(7)
    assert s.player_stone == PlayerColor.BLACK

    assert ctl.request_next_level()
    assert s.challenge_level == 2
    assert s.difficulty == 2
    assert rec.named("challenge")[-1] == ("challenge", 2, "新手级 AI")

    s.challenge_level = 10
    assert not ctl.request_next_level()

    ctl.set_mode(GameMode.NORMAL)
    assert s.difficulty == 5
    assert not ctl.request_next_level()


def test_winning_a_challenge_level():
    ai = ScriptedAI((0, 0), (0, 1), (0, 2), (0, 3))
    ctl, _ = _controller(ai=ai, ai_delay=0)
    ctl.set_mode(GameMode.CHALLENGE)
    ctl.session.difficulty = 10
    assert not ctl.can_advance_level
    for col in range(3, 8):
        ctl.request_player_move(7, col)
    assert ctl.can_advance_level
    assert not ctl.challenge_complete
    assert ctl.request_next_level()
    assert ctl.session.history == []


def test_player_color_change_restarts():
    ctl, rec = _controller()
    ctl.request_player_move(7, 7)
    assert ctl.set_player_color(PlayerColor.WHITE)
    s = ctl.session
    assert s.history == []
    assert s.player_stone == PlayerColor.WHITE
    assert ctl.phase == Phase.COMPUTER_THINKING
    assert ctl.run_pending_computer_move() == Position(7, 7)


def test_set_difficulty_validates():
    ctl, _ = _controller()
    assert ctl.set_difficulty(8)
    assert ctl.session.difficulty_setting.randomness == 0.03
    with pytest.raises(ValueError):
        ctl.set_difficulty(0)


def test_broken_listener_does_not_stop_the_game():
    class Broken(GameListener):
        def board_changed(self, board):
            raise RuntimeError("render failed")

    ctl, rec = _controller(ai_delay=0)
    ctl.add_listener(Broken())
    assert ctl.request_player_move(7, 7)
    assert len(ctl.session.history) == 2
    assert rec.events[-1] == ("turn", PlayerColor.BLACK, False)


def test_removed_listener_hears_nothing():
    ctl, rec = _controller()
    ctl.remove_listener(rec)
    ctl.request_player_move(7, 7)
    assert len(rec.events) == 2
