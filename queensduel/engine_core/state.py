"""
Game State - Immutable snapshot of a two-player queens game.

Design principles:
- Immutable: every change returns a new state
- Self-contained: carries the board, the placed queens and the cached
  valid moves for the player to act
- Serializable: plain ints and tuples, converted by the API schemas
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from .board import Board


PLAYER_ONE = 1
PLAYER_TWO = 2


class GamePhase(Enum):
    """High-level game phases."""
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


def other_player(player: int) -> int:
    return PLAYER_TWO if player == PLAYER_ONE else PLAYER_ONE


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer (commit_move). Strategies
    simulate moves with with_move(), which never touches this instance.
    """
    n: int
    regions: tuple[int, ...]

    queen_positions: tuple[int, ...] = ()
    current_player: int = PLAYER_ONE
    game_over: bool = False
    winner: int | None = None

    # Valid moves for current_player; empty once the game is over
    valid_moves: tuple[int, ...] = ()

    player1_queens: int = 0
    player2_queens: int = 0

    message: str = ""

    @property
    def board(self) -> Board:
        return Board(n=self.n, regions=self.regions)

    @property
    def phase(self) -> GamePhase:
        return GamePhase.GAME_OVER if self.game_over else GamePhase.IN_PROGRESS

    @property
    def opponent(self) -> int:
        return other_player(self.current_player)

    @property
    def queens_placed(self) -> int:
        return len(self.queen_positions)

    @property
    def occupied_regions(self) -> frozenset[int]:
        return frozenset(self.regions[q] for q in self.queen_positions)

    def queen_count(self, player: int) -> int:
        return self.player1_queens if player == PLAYER_ONE else self.player2_queens

    def with_move(self, position: int) -> GameState:
        """
        Return the state after placing a queen, without validation.

        The turn passes to the opponent. valid_moves is left empty; callers
        that need it recompute it with move_generator.valid_moves().
        Used for lookahead; real moves go through commit_move().
        """
        p1 = self.player1_queens + (1 if self.current_player == PLAYER_ONE else 0)
        p2 = self.player2_queens + (1 if self.current_player == PLAYER_TWO else 0)
        return self._copy_with(
            queen_positions=self.queen_positions + (position,),
            current_player=self.opponent,
            valid_moves=(),
            player1_queens=p1,
            player2_queens=p2,
            message="",
        )

    def with_player(self, player: int) -> GameState:
        """Return the same position with a different player to move."""
        return self._copy_with(current_player=player)

    def with_message(self, message: str) -> GameState:
        return self._copy_with(message=message)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
