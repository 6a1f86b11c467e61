"""
Exhaustive bitmask backtracking solver.

Assigns rows in order 0, 1, ..., N-1. For each row every column that is
free under the column, diagonal and region masks is tried in turn.
A (row, masks) combination whose every column failed is recorded as a
dead end; reaching the same combination by another path is rejected
without searching again.

Returns the first complete placement found.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time

from ..engine_core.board import Board
from ..engine_core.context import SearchContext
from ..engine_core.errors import SearchBudgetExceeded
from .base import Solution
from .constraints import BitBoard, Masks

logger = logging.getLogger(__name__)


@dataclass
class ExhaustiveSolver:
    """
    Row-order backtracking with dead-end memoization.

    Usage:
        solution = ExhaustiveSolver().solve(board)
        if solution.solved:
            print(solution.queen_positions)
    """
    name: str = "dp"

    def solve(self, board: Board, context: SearchContext | None = None) -> Solution:
        context = context or SearchContext()
        bits = BitBoard.from_board(board)
        dead_ends: set[tuple[int, int, int, int, int]] = set()
        started = time.perf_counter()

        try:
            path = self._place_row(bits, 0, Masks(), [], dead_ends, context)
        except SearchBudgetExceeded as e:
            context.stats.elapsed = time.perf_counter() - started
            context.stats.memo_size = len(dead_ends)
            logger.debug("Exhaustive search aborted after %d nodes", context.stats.nodes)
            return Solution.failure(
                e.message, self.name, error_code=e.code, stats=context.stats.as_dict()
            )

        context.stats.elapsed = time.perf_counter() - started
        context.stats.memo_size = len(dead_ends)
        logger.debug(
            "Exhaustive search on n=%d: %d nodes, %d dead ends, %d memo hits",
            board.n, context.stats.nodes, len(dead_ends), context.stats.memo_hits,
        )

        if path is None:
            return Solution.failure(
                "No solution found using bitmask backtracking",
                self.name,
                stats=context.stats.as_dict(),
            )
        return Solution.success(
            path,
            self.name,
            f"Solved using bitmask backtracking with {context.stats.memo_hits} cache hits",
            stats=context.stats.as_dict(),
        )

    def _place_row(
        self,
        bits: BitBoard,
        row: int,
        masks: Masks,
        path: list[int],
        dead_ends: set[tuple[int, int, int, int, int]],
        context: SearchContext,
    ) -> list[int] | None:
        if row == bits.n:
            return list(path)

        key = (row, masks.cols, masks.diag1, masks.diag2, masks.regs)
        if key in dead_ends:
            context.stats.memo_hits += 1
            return None

        context.visit()
        for col in range(bits.n):
            if not bits.allows(masks, row, col):
                continue
            path.append(row * bits.n + col)
            found = self._place_row(
                bits, row + 1, bits.place(masks, row, col), path, dead_ends, context
            )
            if found is not None:
                return found
            path.pop()

        dead_ends.add(key)
        return None
