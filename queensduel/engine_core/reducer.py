"""
Reducer - The game state machine.

The reducer is the single point of state change.
All real moves go through commit_move().

Design principles:
- Pure function: (state, move) -> MoveResult with a new state
- Validates before applying
- Rejections leave the state unchanged and say why in its message
- A player with no valid moves loses; this is an outcome, not an error
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence
import logging

from .action import Move, MoveResult
from .board import Board, is_legal_placement
from .errors import ErrorCode, InvalidStateError
from .move_generator import MoveGenerator
from .state import GameState, PLAYER_ONE, PLAYER_TWO, other_player

logger = logging.getLogger(__name__)


def player_name(player: int) -> str:
    return f"Player {player}"


@dataclass
class Reducer:
    """
    Applies moves to game state.

    Stateless - all state is in GameState.
    """
    move_generator: MoveGenerator = field(default_factory=MoveGenerator)

    def initialize(self, n: int, regions: Sequence[int]) -> GameState:
        """
        Start a new game.

        Raises InvalidBoardError if the region partition is malformed.
        """
        board = Board.create(n, regions)
        state = GameState(n=board.n, regions=board.regions)
        moves = self.move_generator.generate(state)
        return state._copy_with(
            valid_moves=moves,
            message=f"Game initialized. {player_name(PLAYER_ONE)}'s turn.",
        )

    def reset(self, state: GameState, regions: Sequence[int] | None = None) -> GameState:
        """Start over on the same board, or on a new partition of it."""
        return self.initialize(state.n, regions if regions is not None else state.regions)

    def check(self, state: GameState) -> GameState:
        """
        Verify a state received from outside the engine.

        Raises InvalidBoardError for a bad partition and InvalidStateError
        when the placed queens or counters break the state invariants.
        """
        board = Board.create(state.n, state.regions)
        queens = state.queen_positions
        if len(queens) > board.n:
            raise InvalidStateError(f"{len(queens)} queens on a board of size {board.n}")
        if not is_legal_placement(queens, board):
            raise InvalidStateError("Placed queens attack each other or share a region")
        if state.current_player not in (PLAYER_ONE, PLAYER_TWO):
            raise InvalidStateError(f"Unknown current player {state.current_player}")
        if state.player1_queens + state.player2_queens != len(queens):
            raise InvalidStateError("Queen counts do not match placed queens")
        return state

    def refresh(self, state: GameState) -> GameState:
        """Recompute the cached valid moves for the player to act."""
        if state.game_over:
            return state._copy_with(valid_moves=())
        moves = self.move_generator.generate(state)
        return state._copy_with(
            valid_moves=moves,
            message=f"{len(moves)} valid moves available.",
        )

    def apply(self, move: Move) -> MoveResult:
        """Apply a Move record."""
        return self.commit(move.game_state, move.position, move.player)

    def commit(
        self,
        state: GameState,
        position: int,
        player: int | None = None,
    ) -> MoveResult:
        """
        Place a queen for the current player.

        Returns MoveResult with the new state or, on rejection, the
        unchanged state carrying the diagnostic.
        """
        validation_error = self._validate(state, position, player)
        if validation_error:
            message, code = validation_error
            logger.debug("Rejected move %s: %s", position, message)
            return MoveResult.failure(message, code, state=state)

        mover = state.current_player
        placed = state.with_move(position)
        changes = [f"{player_name(mover)} placed a queen on {position}"]

        # Every region holds a queen: nothing is left to place.
        if placed.queens_placed == state.n:
            final = placed._copy_with(
                current_player=mover,
                game_over=True,
                winner=mover,
                valid_moves=(),
                message=f"{player_name(mover)} wins! All {state.n} regions are filled.",
            )
            return MoveResult.success_with_state(final, position, changes)

        opponent_moves = self.move_generator.generate(placed)
        if not opponent_moves:
            final = placed._copy_with(
                current_player=mover,
                game_over=True,
                winner=mover,
                valid_moves=(),
                message=f"{player_name(mover)} wins! Opponent has no valid moves.",
            )
            return MoveResult.success_with_state(final, position, changes)

        next_player = other_player(mover)
        final = placed._copy_with(
            valid_moves=opponent_moves,
            message=(
                f"{player_name(next_player)}'s turn. "
                f"{len(opponent_moves)} valid moves available."
            ),
        )
        return MoveResult.success_with_state(final, position, changes)

    def forfeit(self, state: GameState, reason: str = "has no valid moves") -> GameState:
        """End the game because the player to act cannot move."""
        winner = state.opponent
        return state._copy_with(
            game_over=True,
            winner=winner,
            valid_moves=(),
            message=f"{player_name(winner)} wins! {player_name(state.current_player)} {reason}.",
        )

    def _validate(
        self,
        state: GameState,
        position: int,
        player: int | None,
    ) -> tuple[str, ErrorCode] | None:
        """
        Validate that a move is legal in the current state.

        Returns (message, code) if invalid, None if valid.
        """
        if state.game_over:
            return "Game is over - no moves allowed", ErrorCode.GAME_OVER

        if player is not None and player not in (PLAYER_ONE, PLAYER_TWO):
            return f"Unknown player {player}", ErrorCode.NOT_YOUR_TURN
        if player is not None and player != state.current_player:
            return f"Not {player_name(player)}'s turn", ErrorCode.NOT_YOUR_TURN

        if not 0 <= position < state.n * state.n:
            return f"Position {position} is off the board", ErrorCode.ILLEGAL_MOVE

        if position not in self.move_generator.generate(state):
            return "Invalid move! Queen would be under attack.", ErrorCode.ILLEGAL_MOVE

        return None


_default_reducer = Reducer()


def init_game(n: int, regions: Sequence[int]) -> GameState:
    """Create a fresh game. Raises InvalidBoardError on a bad partition."""
    return _default_reducer.initialize(n, regions)


def reset_game(state: GameState, regions: Sequence[int] | None = None) -> GameState:
    return _default_reducer.reset(state, regions)


def commit_move(state: GameState, position: int, player: int | None = None) -> MoveResult:
    """
    Convenience function to commit a move.

    Usage:
        result = commit_move(state, 5)
        if result.success:
            state = result.new_state
    """
    return _default_reducer.commit(state, position, player)


def apply_move(move: Move) -> MoveResult:
    return _default_reducer.apply(move)
