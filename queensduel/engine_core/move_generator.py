"""
Move Generator - Enumerates legal placements from a game state.

The generator is used by:
1. The reducer, to validate a move and to detect a stuck opponent
2. Strategies, to enumerate candidate moves
3. The API, to show available moves

Legality does not depend on whose turn it is: both players draw from
the same pool of safe cells.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .board import AttackCache, Board, is_safe

if TYPE_CHECKING:
    from .state import GameState


@dataclass
class MoveGenerator:
    """
    Generates valid moves for a position.

    With an AttackCache the safety test is a set lookup instead of a
    recomputation; the result is the same either way.
    """
    attack_cache: AttackCache | None = None

    def generate(self, state: GameState) -> tuple[int, ...]:
        """All safe cells in ascending order. O(N² · k)."""
        return self.generate_for(state.board, state.queen_positions)

    def generate_for(self, board: Board, queens: tuple[int, ...]) -> tuple[int, ...]:
        if len(queens) >= board.n:
            return ()
        if self.attack_cache is not None:
            check = self.attack_cache.is_safe
        else:
            check = is_safe
        return tuple(p for p in range(board.size) if check(p, queens, board))

    def count(self, state: GameState) -> int:
        """Number of valid moves, without building the tuple."""
        board = state.board
        queens = state.queen_positions
        if len(queens) >= board.n:
            return 0
        check = self.attack_cache.is_safe if self.attack_cache is not None else is_safe
        return sum(1 for p in range(board.size) if check(p, queens, board))


_default_generator = MoveGenerator()


def valid_moves(state: GameState, attack_cache: AttackCache | None = None) -> tuple[int, ...]:
    """
    Convenience function to enumerate valid moves.

    Usage:
        moves = valid_moves(state)
        if not moves:
            # player to move is stuck
    """
    if attack_cache is None:
        return _default_generator.generate(state)
    return MoveGenerator(attack_cache=attack_cache).generate(state)
