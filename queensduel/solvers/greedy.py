"""
Greedy constructive solver.

Processes regions from smallest to largest and drops one queen in each,
choosing the free cell that removes the fewest free cells from the
regions still waiting for a queen. Never backtracks, so it can fail on
boards that do have a solution; it reports the partial placement and
the region it got stuck on.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time

from ..engine_core.board import Board
from ..engine_core.context import SearchContext
from .base import Solution

logger = logging.getLogger(__name__)


@dataclass
class GreedySolver:
    """Fewest-cells-first region ordering, least-constraining cell choice."""
    name: str = "greedy"

    def solve(self, board: Board, context: SearchContext | None = None) -> Solution:
        context = context or SearchContext()
        table = context.attack_cache.table(board.n)
        region_cells = board.region_cells()
        order = sorted(region_cells, key=lambda r: (len(region_cells[r]), r))
        started = time.perf_counter()

        placed: list[int] = []
        blocked: set[int] = set()
        pending = set(order)

        for region in order:
            context.stats.nodes += 1
            pending.discard(region)
            candidates = [p for p in region_cells[region] if p not in blocked]
            if not candidates:
                context.stats.elapsed = time.perf_counter() - started
                logger.debug("Greedy solve stuck on region %s after %d queens", region, len(placed))
                return Solution.failure(
                    f"Cannot place queen in region {region}. No valid positions available.",
                    self.name,
                    positions=placed,
                    stats=context.stats.as_dict(),
                )

            open_cells = [
                p for r in pending for p in region_cells[r] if p not in blocked
            ]
            best = min(
                candidates,
                key=lambda p: (sum(1 for c in open_cells if c in table[p]), p),
            )
            placed.append(best)
            blocked.add(best)
            blocked.update(table[best])

        context.stats.elapsed = time.perf_counter() - started
        return Solution.success(
            placed,
            self.name,
            f"Successfully placed {board.n} queens using greedy algorithm.",
            stats=context.stats.as_dict(),
        )
