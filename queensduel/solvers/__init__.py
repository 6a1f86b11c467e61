"""
Solvers module - Whole-board placement, independent of turn order.

Provides:
- ExhaustiveSolver ("dp"): row-order bitmask backtracking with dead-end memo
- MRVSolver ("dnc"): most-constrained-row-first backtracking
- GreedySolver ("greedy"): constructive, no backtracking
- solve(): validates input and runs one of the above, or "minimax"

Every solve returns a Solution; invalid input and exhausted budgets come
back as solved=False with an error code instead of raising.
"""

from __future__ import annotations
from typing import Sequence
import logging

from ..engine_core.board import Board, is_full_solution
from ..engine_core.context import SearchContext
from ..engine_core.errors import InvalidBoardError, SearchBudgetExceeded, UnknownAlgorithmError
from ..engine_core.state import GameState
from .base import Solution
from .exhaustive import ExhaustiveSolver
from .greedy import GreedySolver
from .mrv import MRVSolver

logger = logging.getLogger(__name__)

DEFAULT_SOLVER = "dp"

SOLVERS = {
    "dp": ExhaustiveSolver,
    "dnc": MRVSolver,
    "greedy": GreedySolver,
}

ALGORITHMS = sorted([*SOLVERS, "minimax"])


def solve(
    n: int,
    regions: Sequence[int],
    algorithm: str = DEFAULT_SOLVER,
    context: SearchContext | None = None,
    minimax_depth: int | None = None,
) -> Solution:
    """
    Place N queens, one per region, using the named algorithm.

    Usage:
        solution = solve(4, regions, "dnc")
        if not solution.solved:
            print(solution.message)
    """
    algorithm = (algorithm or DEFAULT_SOLVER).lower()
    if algorithm not in ALGORITHMS:
        e = UnknownAlgorithmError(algorithm, ALGORITHMS)
        return Solution.failure(e.message, algorithm, error_code=e.code)

    try:
        board = Board.create(n, regions)
    except InvalidBoardError as e:
        return Solution.failure(e.message, algorithm, error_code=e.code)

    context = context or SearchContext()
    if algorithm == "minimax":
        solution = _solve_minimax(board, context, minimax_depth)
    else:
        solution = SOLVERS[algorithm]().solve(board, context)

    logger.debug("solve n=%d with %s: solved=%s", n, algorithm, solution.solved)
    return solution


def _solve_minimax(board: Board, context: SearchContext, depth: int | None) -> Solution:
    """
    Report the minimax principal line from the empty board.

    The line is a sequence of alternating moves; it only counts as a
    solution when it happens to fill every region.
    """
    from ..bots.minimax import DEFAULT_DEPTH, MinimaxPolicy

    policy = MinimaxPolicy(depth=depth or DEFAULT_DEPTH)
    state = GameState(n=board.n, regions=board.regions)
    try:
        result = policy.search(state, context)
    except SearchBudgetExceeded as e:
        return Solution.failure(
            e.message, "minimax", error_code=e.code, stats=context.stats.as_dict()
        )

    line = list(result.principal_variation)
    if is_full_solution(line, board):
        return Solution.success(
            line,
            "minimax",
            f"Solved using minimax with score: {result.score:g}",
            stats=context.stats.as_dict(),
        )
    return Solution.failure(
        f"Minimax line placed {len(line)} of {board.n} queens (score {result.score:g})",
        "minimax",
        positions=line,
        stats=context.stats.as_dict(),
    )


__all__ = [
    "Solution",
    "ExhaustiveSolver",
    "MRVSolver",
    "GreedySolver",
    "SOLVERS",
    "ALGORITHMS",
    "DEFAULT_SOLVER",
    "solve",
]
