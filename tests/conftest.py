import pytest

from core.board import Board


@pytest.fixture
def board():
    return Board()
