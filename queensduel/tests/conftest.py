"""
Pytest fixtures for Queens Duel tests.
"""

import pytest

from ..engine_core.board import Board
from ..engine_core.context import SearchContext
from ..engine_core.reducer import init_game, commit_move
from ..engine_core.state import GameState


# 4x4, four scattered regions. No full placement exists, but every cell
# is open at the start.
SCATTERED_4 = [0, 1, 2, 3, 1, 0, 3, 2, 2, 3, 0, 1, 3, 2, 1, 0]

# 4x4 where both 4-queens solutions put two queens in one region.
UNSOLVABLE_4 = [1, 0, 0, 1, 0, 1, 2, 0, 2, 2, 2, 3, 3, 3, 3, 1]

# Irregular 5x5 with the solution 0, 8, 11, 19, 22.
IRREGULAR_5 = [
    0, 0, 1, 1, 1,
    0, 2, 2, 1, 1,
    0, 2, 2, 3, 3,
    4, 4, 2, 3, 3,
    4, 4, 4, 4, 3,
]


def row_regions(n: int) -> list[int]:
    """One region per row: plain N-queens."""
    return [row for row in range(n) for _ in range(n)]


@pytest.fixture
def scattered_state() -> GameState:
    return init_game(4, SCATTERED_4)


@pytest.fixture
def rows_4() -> list[int]:
    return row_regions(4)


@pytest.fixture
def rows_4_board(rows_4) -> Board:
    return Board.create(4, rows_4)


@pytest.fixture
def rows_4_state(rows_4) -> GameState:
    return init_game(4, rows_4)


@pytest.fixture
def corner_opening(rows_4_state) -> GameState:
    """Player 1 took the corner; player 2 to move."""
    return commit_move(rows_4_state, 0).new_state


@pytest.fixture
def winning_position(rows_4_state) -> GameState:
    """
    Queens on 0 (P1) and 7 (P2); player 1 to move.

    Both of player 1's moves, 9 and 14, leave player 2 stuck.
    """
    state = commit_move(rows_4_state, 0).new_state
    return commit_move(state, 7).new_state


@pytest.fixture
def context() -> SearchContext:
    return SearchContext()
