from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
from .config import MIN_LEVEL, MAX_LEVEL

@dataclass(frozen=True)
class DifficultyLevel:
    level: int
    randomness: float
    label: str

# 随机走子概率随级别递减，第 10 级完全不随机
DIFFICULTY_TABLE: Tuple[DifficultyLevel, ...] = (
    DifficultyLevel(1, 0.5, "菜鸟级 AI"),
    DifficultyLevel(2, 0.4, "新手级 AI"),
    DifficultyLevel(3, 0.3, "初级 AI"),
    DifficultyLevel(4, 0.2, "中初级 AI"),
    DifficultyLevel(5, 0.15, "中级 AI"),
    DifficultyLevel(6, 0.1, "中高级 AI"),
    DifficultyLevel(7, 0.05, "高级 AI"),
    DifficultyLevel(8, 0.03, "专家级 AI"),
    DifficultyLevel(9, 0.01, "大师级 AI"),
    DifficultyLevel(10, 0.0, "五子棋之神"),
)

def get_difficulty(level: int) -> DifficultyLevel:
    if level < MIN_LEVEL or level > MAX_LEVEL:
        raise ValueError(f"难度级别需在 {MIN_LEVEL}~{MAX_LEVEL} 之间: {level}")
    return DIFFICULTY_TABLE[level - 1]
