"""
Engine Core - Board legality and the game state machine.

The engine:
1. Validates a board (size and region partition)
2. Manages an immutable GameState
3. Generates valid moves
4. Commits moves via the reducer
5. Carries shared caches in an explicit SearchContext
"""

from .errors import (
    ErrorCode, QueensError, InvalidBoardError, InvalidStateError, UnknownAlgorithmError,
    SearchBudgetExceeded,
)
from .board import Board, AttackCache, attacks, is_safe, is_legal_placement, is_full_solution
from .state import GameState, GamePhase, PLAYER_ONE, PLAYER_TWO, other_player
from .action import Move, MoveResult
from .move_generator import MoveGenerator, valid_moves
from .reducer import Reducer, init_game, reset_game, commit_move, apply_move
from .context import SearchContext, SearchStats, StatsCollector

__all__ = [
    "ErrorCode",
    "QueensError",
    "InvalidBoardError",
    "InvalidStateError",
    "UnknownAlgorithmError",
    "SearchBudgetExceeded",
    "Board",
    "AttackCache",
    "attacks",
    "is_safe",
    "is_legal_placement",
    "is_full_solution",
    "GameState",
    "GamePhase",
    "PLAYER_ONE",
    "PLAYER_TWO",
    "other_player",
    "Move",
    "MoveResult",
    "MoveGenerator",
    "valid_moves",
    "Reducer",
    "init_game",
    "reset_game",
    "commit_move",
    "apply_move",
    "SearchContext",
    "SearchStats",
    "StatsCollector",
]
