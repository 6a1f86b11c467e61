"""
Strategy Dispatcher - Routes an AI move request to a policy and commits it.

Tags:
    greedy    GreedyPolicy (default)
    minimax   MinimaxPolicy
    dp, dnc   DnCPolicy

If the chosen policy has no move while valid moves remain, the greedy
policy is asked instead. If nothing can produce a move, the player to
act loses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from ..engine_core.action import MoveResult
from ..engine_core.context import SearchContext
from ..engine_core.errors import ErrorCode, SearchBudgetExceeded, UnknownAlgorithmError
from ..engine_core.move_generator import MoveGenerator
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState
from .dnc import DnCPolicy
from .greedy import GreedyPolicy
from .minimax import DEFAULT_DEPTH, MinimaxPolicy
from .policy import BotDecision, MovePolicy

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "greedy"

POLICIES: dict[str, Callable[..., MovePolicy]] = {
    "greedy": GreedyPolicy,
    "minimax": MinimaxPolicy,
    "dp": DnCPolicy,
    "dnc": DnCPolicy,
}


def create_policy(algorithm: str, minimax_depth: int = DEFAULT_DEPTH) -> MovePolicy:
    """Build the policy registered under a tag (case-insensitive)."""
    factory = POLICIES.get((algorithm or DEFAULT_ALGORITHM).lower())
    if factory is None:
        raise UnknownAlgorithmError(algorithm, sorted(POLICIES))
    if factory is MinimaxPolicy:
        return MinimaxPolicy(depth=minimax_depth)
    return factory()


@dataclass
class StrategyDispatcher:
    """
    Selects and commits AI moves.

    Usage:
        dispatcher = StrategyDispatcher(minimax_depth=4)
        result = dispatcher.get_ai_move(state, "minimax")
        state = result.new_state
    """
    reducer: Reducer = field(default_factory=Reducer)
    minimax_depth: int = DEFAULT_DEPTH
    fallback: str = DEFAULT_ALGORITHM

    def get_ai_move(
        self,
        state: GameState,
        algorithm: str = DEFAULT_ALGORITHM,
        context: SearchContext | None = None,
    ) -> MoveResult:
        if state.game_over:
            return MoveResult.failure(
                "Game is over - no moves allowed", ErrorCode.GAME_OVER, state=state
            )

        try:
            policy = create_policy(algorithm, self.minimax_depth)
        except UnknownAlgorithmError as e:
            return MoveResult.failure(e.message, e.code, state=state)

        context = context or SearchContext()
        decision = self._decide(policy, state, context)

        if decision is None and (algorithm or "").lower() != self.fallback:
            moves = MoveGenerator(attack_cache=context.attack_cache).generate(state)
            if moves:
                logger.info(
                    "%s produced no move with %d valid moves left; falling back to %s",
                    policy.get_name(), len(moves), self.fallback,
                )
                decision = self._decide(create_policy(self.fallback), state, context.fork())

        if decision is None:
            final = self.reducer.forfeit(state)
            logger.info("No move for player %d; player %d wins", state.current_player, final.winner)
            return MoveResult.success_with_state(
                final, changes=[f"Player {state.current_player} could not move"]
            )

        result = self.reducer.commit(state, decision.position)
        if result.success:
            result.state_changes.append(decision.explanation)
        return result

    def _decide(
        self,
        policy: MovePolicy,
        state: GameState,
        context: SearchContext,
    ) -> BotDecision | None:
        try:
            return policy.select_move(state, context)
        except SearchBudgetExceeded as e:
            logger.warning("%s gave up: %s", policy.get_name(), e.message)
            return None


_default_dispatcher = StrategyDispatcher()


def get_ai_move(
    state: GameState,
    algorithm: str = DEFAULT_ALGORITHM,
    context: SearchContext | None = None,
) -> MoveResult:
    """
    Convenience function: pick a move with the named strategy and commit it.

    Usage:
        result = get_ai_move(state, "minimax")
    """
    return _default_dispatcher.get_ai_move(state, algorithm, context)
