"""
API Service - Business logic layer for the API.

Framework-agnostic; the FastAPI app in app.py only translates HTTP to
these calls. Every method takes and returns engine types, so the
service is usable directly from Python and from tests.

The service keeps no games. The caller sends the full GameState with
each request; the only long-lived data is the shared AttackCache and
the running search counters.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Sequence
import logging

from ..bots.dispatcher import DEFAULT_ALGORITHM, StrategyDispatcher
from ..bots.minimax import DEFAULT_DEPTH
from ..engine_core.action import MoveResult
from ..engine_core.board import AttackCache
from ..engine_core.context import SearchContext, StatsCollector
from ..engine_core.move_generator import MoveGenerator
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState
from ..solvers import DEFAULT_SOLVER, Solution, solve

logger = logging.getLogger(__name__)


@dataclass
class QueensService:
    """
    Main API service.

    Usage:
        service = QueensService()
        state = service.init_game(4, regions)
        state = service.make_move(5, 1, state)
        state = service.get_ai_move(state, "minimax")
        solution = service.solve(4, regions, "dp")
    """
    attack_cache: AttackCache = field(default_factory=AttackCache)
    stats: StatsCollector = field(default_factory=StatsCollector)
    minimax_depth: int = DEFAULT_DEPTH
    max_nodes: int | None = None
    reducer: Reducer | None = None
    dispatcher: StrategyDispatcher | None = None

    def __post_init__(self):
        if self.reducer is None:
            self.reducer = Reducer(MoveGenerator(attack_cache=self.attack_cache))
        if self.dispatcher is None:
            self.dispatcher = StrategyDispatcher(
                reducer=self.reducer, minimax_depth=self.minimax_depth
            )

    def init_game(self, n: int, regions: Sequence[int]) -> GameState:
        """Raises InvalidBoardError on a malformed partition."""
        state = self.reducer.initialize(n, regions)
        logger.info("Initialized %dx%d game with %d valid moves", n, n, len(state.valid_moves))
        return state

    def make_move(
        self,
        position: int,
        player: int | None,
        game_state: GameState,
    ) -> GameState:
        """
        Place a queen for a human player.

        An illegal move is not an error at this level: the returned state
        is the submitted one with the rejection in its message.
        """
        state = self.reducer.check(game_state)
        result = self.reducer.commit(state, position, player)
        if not result.success:
            logger.info("Rejected move %d: %s", position, result.error)
        return result.new_state

    def get_ai_move(
        self,
        game_state: GameState,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> GameState:
        return self.get_ai_result(game_state, algorithm).new_state

    def get_ai_result(
        self,
        game_state: GameState,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> MoveResult:
        """Like get_ai_move, keeping the position and explanation."""
        state = self.reducer.check(game_state)
        context = self._context()
        result = self.dispatcher.get_ai_move(state, algorithm, context)
        self.stats.record(algorithm or DEFAULT_ALGORITHM, context.stats)
        logger.info(
            "AI move (%s) for player %d: %s in %d nodes",
            algorithm, state.current_player, result.position, context.stats.nodes,
        )
        return result

    def get_valid_moves(self, game_state: GameState) -> GameState:
        state = self.reducer.check(game_state)
        return self.reducer.refresh(state)

    def reset_game(self, game_state: GameState) -> GameState:
        """Fresh game on the same partition."""
        return self.reducer.reset(game_state)

    def solve(
        self,
        n: int,
        regions: Sequence[int],
        algorithm: str = DEFAULT_SOLVER,
    ) -> Solution:
        context = self._context()
        solution = solve(n, regions, algorithm, context, minimax_depth=self.minimax_depth)
        if context.stats.nodes:
            self.stats.record(solution.algorithm, context.stats)
        logger.info("Solve n=%d with %s: %s", n, algorithm, solution.message)
        return solution

    def get_stats(self) -> dict[str, Any]:
        return {
            "attack_cache_sizes": self.attack_cache.sizes(),
            "totals": self.stats.snapshot(),
        }

    def clear_caches(self):
        self.attack_cache.clear()
        self.stats.clear()
        logger.info("Caches cleared")

    def _context(self) -> SearchContext:
        return SearchContext(attack_cache=self.attack_cache, max_nodes=self.max_nodes)
