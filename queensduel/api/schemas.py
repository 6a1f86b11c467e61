"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the board UI and the engine.
Field names are camelCase on the wire (queenPositions, currentPlayer,
...) and snake_case in Python; either spelling is accepted on input.

The full GameState travels in every request, so the service is
stateless between calls.

Error Codes:
- INVALID_REGIONS_SIZE: regions length is not n²
- INVALID_REGION_COUNT: number of distinct regions is not n
- INVALID_STATE: submitted game state breaks its invariants
- UNKNOWN_ALGORITHM: algorithm tag is not registered
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..engine_core.errors import ErrorCode
from ..engine_core.state import GameState
from ..solvers.base import Solution


class WireModel(BaseModel):
    """Base model: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Enums
# =============================================================================

class Algorithm(str, Enum):
    """AI move strategies."""
    GREEDY = "greedy"
    MINIMAX = "minimax"
    DP = "dp"
    DNC = "dnc"


class SolverAlgorithm(str, Enum):
    """Whole-board solvers."""
    DP = "dp"
    DNC = "dnc"
    GREEDY = "greedy"
    MINIMAX = "minimax"


# =============================================================================
# Shared Models
# =============================================================================

class GameStateModel(WireModel):
    """A game state as exchanged with the UI."""
    n: int = Field(ge=1, le=16, description="Board size")
    regions: list[int] = Field(description="Region id of each cell, row-major, length n²")
    queen_positions: list[int] = Field(default_factory=list, description="Cells with queens, in play order")
    current_player: int = Field(1, ge=1, le=2)
    game_over: bool = False
    winner: Optional[int] = Field(None, ge=1, le=2)
    message: str = ""
    valid_moves: list[int] = Field(default_factory=list)
    player1_queens: int = Field(0, ge=0)
    player2_queens: int = Field(0, ge=0)

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        return cls(
            n=state.n,
            regions=list(state.regions),
            queen_positions=list(state.queen_positions),
            current_player=state.current_player,
            game_over=state.game_over,
            winner=state.winner,
            message=state.message,
            valid_moves=list(state.valid_moves),
            player1_queens=state.player1_queens,
            player2_queens=state.player2_queens,
        )

    def to_state(self) -> GameState:
        return GameState(
            n=self.n,
            regions=tuple(self.regions),
            queen_positions=tuple(self.queen_positions),
            current_player=self.current_player,
            game_over=self.game_over,
            winner=self.winner,
            valid_moves=tuple(self.valid_moves),
            player1_queens=self.player1_queens,
            player2_queens=self.player2_queens,
            message=self.message,
        )


# =============================================================================
# Request Models
# =============================================================================

class InitGameRequest(WireModel):
    """Start a new game on a partitioned board."""
    n: int = Field(ge=1, le=16, description="Board size")
    regions: list[int] = Field(description="Region id of each cell, row-major, length n²")


class MoveRequest(WireModel):
    """Place a queen for a player."""
    position: int = Field(ge=0, description="Cell index (row * n + col)")
    player: Optional[int] = Field(None, ge=1, le=2, description="Acting player; defaults to the player to move")
    game_state: GameStateModel


class AIMoveRequest(WireModel):
    """Let a strategy move for the player to act."""
    game_state: GameStateModel
    algorithm: Algorithm = Algorithm.GREEDY


class SolveRequest(WireModel):
    """Solve the whole board, ignoring turns."""
    n: int = Field(ge=1, le=16)
    regions: list[int]
    algorithm: SolverAlgorithm = SolverAlgorithm.DP


# =============================================================================
# Response Models
# =============================================================================

class SolutionResponse(WireModel):
    """Result of a whole-board solve."""
    queen_positions: list[int] = Field(default_factory=list)
    solved: bool
    message: str
    algorithm: str
    error_code: Optional[ErrorCode] = None
    stats: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_solution(cls, solution: Solution) -> "SolutionResponse":
        return cls(
            queen_positions=solution.queen_positions,
            solved=solution.solved,
            message=solution.message,
            algorithm=solution.algorithm,
            error_code=solution.error_code,
            stats=solution.stats,
        )


class StatsResponse(WireModel):
    """Cache sizes and cumulative search counters."""
    attack_cache_sizes: list[int] = Field(default_factory=list, description="Board sizes with cached attack tables")
    totals: dict[str, dict[str, float]] = Field(default_factory=dict, description="Counters per algorithm")


class ClearCacheResponse(WireModel):
    success: bool = True
    message: str = "Caches cleared successfully"


class ErrorResponse(WireModel):
    """Structured error response."""
    success: bool = False
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(WireModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    environment: str
