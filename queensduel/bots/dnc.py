"""
Divide-and-conquer policy - picks a move from an in-progress game.

1. If some valid move leaves the opponent with no valid moves, play it.
2. Otherwise complete the current placement with the MRV solver and
   play the first queen the completion adds.

Returns None when the placement cannot be completed; the dispatcher
decides what happens next.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.context import SearchContext
from ..engine_core.move_generator import MoveGenerator
from ..solvers.mrv import MRVSolver
from .policy import MovePolicy, BotDecision

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass
class DnCPolicy(MovePolicy):
    """Instant-win check, then an MRV completion of the board."""
    solver: MRVSolver = field(default_factory=MRVSolver)

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

        for position in moves:
            if generator.count(state.with_move(position)) == 0:
                return BotDecision(
                    position=position,
                    explanation="Immediate win: opponent is left without moves",
                    evaluated_moves=len(moves),
                )

        placed = state.queen_positions
        solution = self.solver.solve(state.board, context, placed=placed)
        if not solution.solved:
            return None

        position = solution.queen_positions[len(placed)]
        return BotDecision(
            position=position,
            explanation="First queen of a completed placement",
            evaluated_moves=len(moves),
            principal_variation=solution.queen_positions[len(placed):],
            evaluation_details=solution.stats,
        )
