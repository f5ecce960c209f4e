"""
Configuration for the Gomoku engine.
"""

# 棋盘
BOARD_SIZE = 15
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 19
WIN_LENGTH = 5

# AI 难度
DEFAULT_DIFFICULTY = 3   # Normal mode at startup
NORMAL_DIFFICULTY = 5    # Normal mode after switching back from Challenge
MIN_LEVEL = 1
MAX_LEVEL = 10

# Seconds the UI waits before the computer replies, so the player's stone renders first
AI_DELAY = 0.8
