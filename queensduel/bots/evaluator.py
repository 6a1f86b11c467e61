"""
Heuristic Evaluator - Scores non-terminal positions for depth-limited search.

The score combines:
- Mobility: how many safe cells remain for the player to act
- Center control: how close the placed queens sit to the board center

The sign follows the search perspective: positive on maximizing plies,
negated on minimizing plies.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    mobility: float = 10.0
    center_control: float = 1.0


class HeuristicEvaluator:
    """
    Evaluates positions at the minimax depth cutoff.

    Usage:
        evaluator = HeuristicEvaluator()
        score = evaluator.evaluate(state, move_count=len(moves), maximizing=True)
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, state: GameState, move_count: int, maximizing: bool) -> float:
        score = (
            self.weights.mobility * move_count
            + self.weights.center_control * self.center_control(state)
        )
        return score if maximizing else -score

    def center_control(self, state: GameState) -> int:
        """Sum of (N - distance to center) over placed queens."""
        board = state.board
        return sum(state.n - board.distance_to_center(q) for q in state.queen_positions)
