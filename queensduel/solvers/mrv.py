"""
Divide-and-conquer backtracking with Minimum Remaining Values ordering.

Uses the same bitmasks as the exhaustive solver, but instead of filling
rows top to bottom it always branches on the unassigned row with the
fewest open columns. If any unassigned row has no open column the
branch is abandoned at once (forward checking).

The solver can start from a partial placement, which is how the game
asks it for a next move in the middle of a match.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import logging
import time

from ..engine_core.board import Board, is_legal_placement
from ..engine_core.context import SearchContext
from ..engine_core.errors import ErrorCode, SearchBudgetExceeded
from .base import Solution
from .constraints import BitBoard, Masks

logger = logging.getLogger(__name__)


@dataclass
class MRVSolver:
    """
    Most-constrained-row-first backtracking.

    Usage:
        solution = MRVSolver().solve(board)
        partial = MRVSolver().solve(board, placed=state.queen_positions)
    """
    name: str = "dnc"

    def solve(
        self,
        board: Board,
        context: SearchContext | None = None,
        placed: Sequence[int] = (),
    ) -> Solution:
        """
        Complete a placement.

        The returned positions start with `placed` in its given order,
        followed by new queens in the order they were placed.
        """
        context = context or SearchContext()
        placed = list(placed)

        if not is_legal_placement(placed, board):
            return Solution.failure(
                "Starting placement is not legal",
                self.name,
                error_code=ErrorCode.ILLEGAL_MOVE,
                positions=placed,
            )

        bits = BitBoard.from_board(board)
        dead_ends: set[tuple[int, int, int, int, int]] = set()
        started = time.perf_counter()

        try:
            path = self._search(bits, bits.masks_for(placed), list(placed), dead_ends, context)
        except SearchBudgetExceeded as e:
            context.stats.elapsed = time.perf_counter() - started
            context.stats.memo_size = len(dead_ends)
            return Solution.failure(
                e.message, self.name, error_code=e.code,
                positions=placed, stats=context.stats.as_dict(),
            )

        context.stats.elapsed = time.perf_counter() - started
        context.stats.memo_size = len(dead_ends)
        logger.debug(
            "MRV search on n=%d from %d queens: %d nodes",
            board.n, len(placed), context.stats.nodes,
        )

        if path is None:
            return Solution.failure(
                "No solution found using divide-and-conquer backtracking",
                self.name,
                positions=placed,
                stats=context.stats.as_dict(),
            )
        return Solution.success(
            path,
            self.name,
            "Solved using divide-and-conquer backtracking with MRV ordering",
            stats=context.stats.as_dict(),
        )

    def _search(
        self,
        bits: BitBoard,
        masks: Masks,
        path: list[int],
        dead_ends: set[tuple[int, int, int, int, int]],
        context: SearchContext,
    ) -> list[int] | None:
        n = bits.n
        if len(path) == n:
            return list(path)

        key = (masks.rows, masks.cols, masks.diag1, masks.diag2, masks.regs)
        if key in dead_ends:
            context.stats.memo_hits += 1
            return None

        context.visit()

        # Pick the unassigned row with the fewest open columns.
        best_row = -1
        best_cols: list[int] = []
        for row in range(n):
            if masks.rows >> row & 1:
                continue
            options = bits.open_columns(masks, row)
            if not options:
                dead_ends.add(key)
                return None
            if best_row < 0 or len(options) < len(best_cols):
                best_row, best_cols = row, options

        for col in best_cols:
            path.append(best_row * n + col)
            found = self._search(
                bits, bits.place(masks, best_row, col), path, dead_ends, context
            )
            if found is not None:
                return found
            path.pop()

        dead_ends.add(key)
        return None
