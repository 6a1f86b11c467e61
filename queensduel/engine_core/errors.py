"""
Engine errors and structured error codes.

Exceptions are raised inside the engine and converted to tagged failure
results (MoveResult, Solution) at the entry points, so every operation
returns the same shape whether it succeeded or not.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_REGIONS_SIZE = "INVALID_REGIONS_SIZE"
    INVALID_REGION_COUNT = "INVALID_REGION_COUNT"
    INVALID_STATE = "INVALID_STATE"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_ALGORITHM = "UNKNOWN_ALGORITHM"
    SEARCH_BUDGET_EXCEEDED = "SEARCH_BUDGET_EXCEEDED"


class QueensError(Exception):
    """Base class for engine errors."""

    def __init__(self, message: str, code: ErrorCode):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidBoardError(QueensError):
    """Raised when a board size / region partition is malformed."""


class InvalidStateError(QueensError):
    """Raised when a game state received from outside breaks its invariants."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_STATE)


class UnknownAlgorithmError(QueensError):
    """Raised when a strategy or solver tag is not registered."""

    def __init__(self, algorithm: str, known: list[str]):
        self.algorithm = algorithm
        super().__init__(
            f"Unknown algorithm '{algorithm}'. Expected one of: {', '.join(known)}",
            ErrorCode.UNKNOWN_ALGORITHM,
        )


class SearchBudgetExceeded(QueensError):
    """Raised when a solver explores more nodes than its budget allows."""

    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        super().__init__(
            f"Search budget of {max_nodes} nodes exceeded",
            ErrorCode.SEARCH_BUDGET_EXCEEDED,
        )
