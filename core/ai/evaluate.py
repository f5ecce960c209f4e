from __future__ import annotations
from core.models import Position, Piece
from core.rules import DIRECTIONS

FIVE = 1000000
# (连子数) -> (无阻挡得分, 有阻挡得分)
LINE_SCORES = {
    4: (50000, 1000),
    3: (5000, 100),
    2: (500, 10),
}
# 防守权重略高于进攻，避免漏掉对手的威胁
DEFENSE_WEIGHT = 1.1

def _score_run(count: int, blocked: int) -> int:
    if count >= 5:
        return FIVE
    scores = LINE_SCORES.get(count)
    if scores is None:
        return 0
    open_score, blocked_score = scores
    return open_score if blocked == 0 else blocked_score

def calculate_line_score(board, p: Position, piece: Piece) -> int:
    """Score the runs ``piece`` would own through ``p`` if it were played there."""
    size = board.size
    grid = board.grid
    total = 0
    for dr, dc in DIRECTIONS:
        count = 1
        blocked = 0
        for sign in (1, -1):
            r, c = p.row + sign * dr, p.col + sign * dc
            while 0 <= r < size and 0 <= c < size:
                cell = grid[r][c]
                if cell == piece:
                    count += 1
                elif cell != Piece.EMPTY:
                    blocked += 1
                    break
                else:
                    break
                r += sign * dr
                c += sign * dc
        total += _score_run(count, blocked)
    return total

def center_bonus(size: int, p: Position) -> int:
    center = (size - 1) // 2
    distance = abs(p.row - center) + abs(p.col - center)
    return (2 * (size - 1) - distance) * 2

def evaluate_position(board, p: Position, computer: Piece) -> float:
    attack = calculate_line_score(board, p, computer)
    defense = calculate_line_score(board, p, computer.opponent)
    return attack + defense * DEFENSE_WEIGHT + center_bonus(board.size, p)
