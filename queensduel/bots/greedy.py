"""
Greedy policy - one-ply lookahead that squeezes the opponent.

For each valid move the policy simulates the placement and counts:
1. The opponent's valid moves afterwards (fewer is better)
2. The mover's own valid moves afterwards, as if it were to act again
   (more is better; breaks ties on 1)

Remaining ties go to the earliest move in board order. A move that
leaves the opponent with nothing is an immediate win and always has
the lowest count, so it is always chosen when one exists.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.context import SearchContext
from ..engine_core.move_generator import MoveGenerator
from .policy import MovePolicy, BotDecision

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass
class GreedyPolicy(MovePolicy):
    """
    Minimize opponent mobility, then maximize own mobility.

    No backtracking; cost is O(N²) candidate moves times an O(N² · k)
    recount for each side.
    """

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

        best_position = None
        best_key: tuple[int, int] | None = None
        scores: dict[int, tuple[int, int]] = {}

        for position in moves:
            context.stats.nodes += 1
            after = state.with_move(position)
            opponent_moves = generator.count(after)
            own_moves = generator.count(after.with_player(state.current_player))
            key = (opponent_moves, -own_moves)
            scores[position] = (opponent_moves, own_moves)

            if best_key is None or key < best_key:
                best_key = key
                best_position = position

        opponent_moves, own_moves = scores[best_position]
        if opponent_moves == 0:
            explanation = "Immediate win: opponent is left without moves"
        else:
            explanation = (
                f"Leaves opponent {opponent_moves} moves, keeps {own_moves} of our own"
            )

        return BotDecision(
            position=best_position,
            explanation=explanation,
            score=-opponent_moves,
            evaluated_moves=len(moves),
            evaluation_details={"opponent_moves": opponent_moves, "own_moves": own_moves},
        )
