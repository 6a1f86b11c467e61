"""
Minimax policy - depth-bounded adversarial search with alpha-beta pruning.

The player to move at the root maximizes; plies alternate from there.

- A side with no valid moves has lost. Scores favour quick wins and
  slow losses: WIN_SCORE - ply when the minimizing side is stuck,
  LOSE_SCORE + ply when the maximizing side is stuck.
- At the depth limit the HeuristicEvaluator scores the position.
- Moves are searched closest-to-center first to tighten the window early.
- Results are memoized by (sorted queens, player to move, remaining
  depth, maximizing). Each entry records whether its score is exact or
  only a bound from a cut-off search, and a bound is reused only where
  it still decides the current window.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging
import math
import time

from ..engine_core.context import SearchContext
from ..engine_core.move_generator import MoveGenerator
from .evaluator import HeuristicEvaluator
from .policy import MovePolicy, BotDecision

if TYPE_CHECKING:
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)

WIN_SCORE = 10000
LOSE_SCORE = -10000
DEFAULT_DEPTH = 6


class Bound(Enum):
    """How a memoized score relates to the true minimax value."""
    EXACT = "exact"
    LOWER = "lower"
    UPPER = "upper"


@dataclass(frozen=True)
class SearchResult:
    """Score from the root player's perspective, best move and principal line."""
    score: float
    best_move: int | None
    principal_variation: tuple[int, ...] = ()


@dataclass(frozen=True)
class MemoEntry:
    result: SearchResult
    bound: Bound


MemoKey = tuple[tuple[int, ...], int, int, bool]


def memo_key(state: GameState, remaining_depth: int, maximizing: bool) -> MemoKey:
    """Canonical key: move order does not matter, ply and perspective do."""
    return (
        tuple(sorted(state.queen_positions)),
        state.current_player,
        remaining_depth,
        maximizing,
    )


@dataclass
class MinimaxPolicy(MovePolicy):
    """
    Alpha-beta minimax with a transposition memo.

    Usage:
        policy = MinimaxPolicy(depth=6)
        result = policy.search(state)
        print(result.best_move, result.principal_variation)
    """
    depth: int = DEFAULT_DEPTH
    evaluator: HeuristicEvaluator = field(default_factory=HeuristicEvaluator)

    def select_move(
        self,
        state: GameState,
        context: SearchContext | None = None,
    ) -> BotDecision | None:
        if state.game_over:
            return None

        context = context or SearchContext()
        generator = MoveGenerator(attack_cache=context.attack_cache)
        moves = generator.generate(state)
        if not moves:
            return None

        if len(moves) == 1:
            return BotDecision(
                position=moves[0],
                explanation="Only one valid move",
                evaluated_moves=1,
                principal_variation=[moves[0]],
            )

        result = self.search(state, context)
        if result.best_move is None:
            return None

        return BotDecision(
            position=result.best_move,
            explanation=f"Minimax depth {self.depth}, score {result.score:g}",
            score=result.score,
            evaluated_moves=len(moves),
            principal_variation=list(result.principal_variation),
            evaluation_details=context.stats.as_dict(),
        )

    def search(self, state: GameState, context: SearchContext | None = None) -> SearchResult:
        """Run the full search from state; the player to move maximizes."""
        context = context or SearchContext()
        generator = MoveGenerator(attack_cache=context.attack_cache)
        memo = self.memo_table(context)
        started = time.perf_counter()

        result = self._minimax(
            state, 0, True, -math.inf, math.inf, memo, context, generator
        )

        context.stats.elapsed = time.perf_counter() - started
        context.stats.memo_size = len(memo)
        logger.debug(
            "Minimax depth %d: move %s score %s, %d nodes, %d memo hits, %d cutoffs",
            self.depth, result.best_move, result.score,
            context.stats.nodes, context.stats.memo_hits, context.stats.cutoffs,
        )
        return result

    def memo_table(self, context: SearchContext) -> dict[MemoKey, MemoEntry]:
        """
        The memo for this depth limit inside the context.

        Scores depend on the ply from the root, which the key only
        captures as remaining depth; tables are therefore kept apart
        per depth limit.
        """
        return context.memo.setdefault(("minimax", self.depth), {})

    def _minimax(
        self,
        state: GameState,
        ply: int,
        maximizing: bool,
        alpha: float,
        beta: float,
        memo: dict[MemoKey, MemoEntry],
        context: SearchContext,
        generator: MoveGenerator,
    ) -> SearchResult:
        remaining = self.depth - ply
        key = memo_key(state, remaining, maximizing)

        entry = memo.get(key)
        if entry is not None:
            score = entry.result.score
            if (
                entry.bound is Bound.EXACT
                or (entry.bound is Bound.LOWER and score >= beta)
                or (entry.bound is Bound.UPPER and score <= alpha)
            ):
                context.stats.memo_hits += 1
                return entry.result

        context.visit()
        moves = generator.generate(state)

        if not moves:
            score = LOSE_SCORE + ply if maximizing else WIN_SCORE - ply
            result = SearchResult(score, None)
            memo[key] = MemoEntry(result, Bound.EXACT)
            return result

        if remaining <= 0:
            score = self.evaluator.evaluate(state, len(moves), maximizing)
            result = SearchResult(score, None)
            memo[key] = MemoEntry(result, Bound.EXACT)
            return result

        if len(moves) == 1:
            move = moves[0]
            child = self._minimax(
                state.with_move(move), ply + 1, not maximizing,
                alpha, beta, memo, context, generator,
            )
            result = SearchResult(child.score, move, (move,) + child.principal_variation)
            memo[key] = MemoEntry(result, _bound_for(result.score, alpha, beta))
            return result

        board = state.board
        ordered = sorted(moves, key=lambda p: (board.distance_to_center(p), p))

        best_score = -math.inf if maximizing else math.inf
        best_move = None
        best_line: tuple[int, ...] = ()
        low, high = alpha, beta

        for move in ordered:
            child = self._minimax(
                state.with_move(move), ply + 1, not maximizing,
                low, high, memo, context, generator,
            )
            if maximizing:
                if child.score > best_score:
                    best_score, best_move, best_line = child.score, move, child.principal_variation
                    low = max(low, best_score)
            else:
                if child.score < best_score:
                    best_score, best_move, best_line = child.score, move, child.principal_variation
                    high = min(high, best_score)

            if high <= low:
                context.stats.cutoffs += 1
                break

        result = SearchResult(best_score, best_move, (best_move,) + best_line)
        memo[key] = MemoEntry(result, _bound_for(best_score, alpha, beta))
        return result


def _bound_for(score: float, alpha: float, beta: float) -> Bound:
    """Classify a fail-soft score against the window it was searched with."""
    if score <= alpha:
        return Bound.UPPER
    if score >= beta:
        return Bound.LOWER
    return Bound.EXACT
