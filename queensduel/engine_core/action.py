"""
Move System - Moves and move results.

A Move names a target cell, the acting player and the state it is
validated against. All state changes flow through the reducer, which
answers with a MoveResult.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import ErrorCode

if TYPE_CHECKING:
    from .state import GameState


@dataclass(frozen=True)
class Move:
    """
    A queen placement request.

    player may be None when the caller does not assert whose turn it is
    (AI moves always act for the current player).
    """
    position: int
    player: int | None
    game_state: GameState

    @classmethod
    def for_current_player(cls, state: GameState, position: int) -> Move:
        """Factory for a move by whoever is to act."""
        return cls(position=position, player=state.current_player, game_state=state)


@dataclass
class MoveResult:
    """
    Result of committing a move.

    Contains:
    - Whether the move was accepted
    - The resulting state (the unchanged input state on failure)
    - Error details (if rejected)
    - A log of what changed, for the UI
    """
    success: bool
    new_state: GameState | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    position: int | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: ErrorCode,
        state: GameState | None = None,
    ) -> MoveResult:
        """Create a failure result; the state, if given, carries the message."""
        new_state = state.with_message(error) if state is not None else None
        return cls(success=False, new_state=new_state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        position: int | None = None,
        changes: list[str] | None = None,
    ) -> MoveResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            position=position,
            state_changes=changes or [],
        )
