"""
Move Policy - Interface for AI move selection.

A MovePolicy takes a game state and returns a decision naming one of
the state's valid moves, or None when it cannot produce one.
Policies never change the state; the dispatcher commits the chosen
move through the reducer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..engine_core.context import SearchContext
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A move chosen by a policy.

    Contains:
    - The position to play
    - Explanation (for UI/debugging)
    - Evaluation details (for debugging)
    """
    position: int
    explanation: str = ""
    score: float = 0.0
    evaluated_moves: int = 0
    principal_variation: list[int] = field(default_factory=list)
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class MovePolicy(ABC):
    """
    Abstract base class for move policies.

    Implementations range from one-ply heuristics to full search.
    """

    @abstractmethod
    def select_move(
        self,
        state: GameState,
        context: SearchContext | None = None,
    ) -> BotDecision | None:
        """
        Select a move for the player to act.

        Args:
            state: Current game state
            context: Caches and budget for this call

        Returns:
            BotDecision whose position is in valid_moves(state),
            or None if the policy has no move to offer
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__
