"""
FastAPI Application - REST API for the board UI.

Endpoints:
    POST   /api/game/init          Start a game on a partitioned board
    POST   /api/game/move          Place a queen for a player
    POST   /api/game/ai-move       Let a strategy move for the player to act
    POST   /api/game/valid-moves   Recompute the valid moves of a state
    POST   /api/game/reset         Start over on the same board
    POST   /api/game/solve         Solve the whole board
    GET    /api/game/stats         Cache sizes and search counters
    POST   /api/game/clear-cache   Drop shared caches and counters
    GET    /health                 Health check

Game endpoints take and return the full GameState (camelCase JSON).
A rejected move is not an HTTP error: the state comes back unchanged
with the reason in its message. Malformed boards and states are 400s
with an ErrorResponse body.
"""

from typing import Optional
import logging
import os

# Environment configuration
QUEENSDUEL_ENV = os.getenv("QUEENSDUEL_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
QUEENSDUEL_MINIMAX_DEPTH = int(os.getenv("QUEENSDUEL_MINIMAX_DEPTH", "6"))
QUEENSDUEL_MAX_NODES = int(os.getenv("QUEENSDUEL_MAX_NODES", "0")) or None

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional QueensService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from ..engine_core.errors import ErrorCode, QueensError
    from .service import QueensService
    from .schemas import (
        # Request models
        InitGameRequest,
        MoveRequest,
        AIMoveRequest,
        SolveRequest,
        # Response models
        GameStateModel,
        SolutionResponse,
        StatsResponse,
        ClearCacheResponse,
        ErrorResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Queens Duel API",
        description="""
Two-player Queens on a board partitioned into N regions.

Players alternate placing queens; a queen may not share a row, column,
diagonal or region with another queen. A player with no safe cell on
their turn loses.

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_REGIONS_SIZE` | regions length is not n² |
| `INVALID_REGION_COUNT` | number of distinct regions is not n |
| `INVALID_STATE` | submitted game state breaks its invariants |
| `UNKNOWN_ALGORITHM` | algorithm tag is not registered |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or QueensService(
        minimax_depth=QUEENSDUEL_MINIMAX_DEPTH,
        max_nodes=QUEENSDUEL_MAX_NODES,
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json", by_alias=True),
        )

    @app.exception_handler(QueensError)
    async def handle_engine_error(request: Request, exc: QueensError):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return make_error_response(exc.code, exc.message)

    # =========================================================================
    # Game
    # =========================================================================

    @app.post(
        "/api/game/init",
        response_model=GameStateModel,
        response_model_by_alias=True,
        responses={400: {"model": ErrorResponse}},
        tags=["Game"],
    )
    def init_game(request: InitGameRequest) -> GameStateModel:
        state = api_service.init_game(request.n, request.regions)
        return GameStateModel.from_state(state)

    @app.post(
        "/api/game/move",
        response_model=GameStateModel,
        response_model_by_alias=True,
        responses={400: {"model": ErrorResponse}},
        tags=["Game"],
    )
    def make_move(request: MoveRequest) -> GameStateModel:
        state = api_service.make_move(
            request.position, request.player, request.game_state.to_state()
        )
        return GameStateModel.from_state(state)

    @app.post(
        "/api/game/ai-move",
        response_model=GameStateModel,
        response_model_by_alias=True,
        responses={400: {"model": ErrorResponse}},
        tags=["Game"],
    )
    def ai_move(request: AIMoveRequest) -> GameStateModel:
        state = api_service.get_ai_move(
            request.game_state.to_state(), request.algorithm.value
        )
        return GameStateModel.from_state(state)

    @app.post(
        "/api/game/valid-moves",
        response_model=GameStateModel,
        response_model_by_alias=True,
        responses={400: {"model": ErrorResponse}},
        tags=["Game"],
    )
    def valid_moves(game_state: GameStateModel) -> GameStateModel:
        state = api_service.get_valid_moves(game_state.to_state())
        return GameStateModel.from_state(state)

    @app.post(
        "/api/game/reset",
        response_model=GameStateModel,
        response_model_by_alias=True,
        responses={400: {"model": ErrorResponse}},
        tags=["Game"],
    )
    def reset_game(game_state: GameStateModel) -> GameStateModel:
        state = api_service.reset_game(game_state.to_state())
        return GameStateModel.from_state(state)

    # =========================================================================
    # Solver
    # =========================================================================

    @app.post(
        "/api/game/solve",
        response_model=SolutionResponse,
        response_model_by_alias=True,
        tags=["Solver"],
    )
    def solve(request: SolveRequest) -> SolutionResponse:
        solution = api_service.solve(request.n, request.regions, request.algorithm.value)
        return SolutionResponse.from_solution(solution)

    @app.get(
        "/api/game/stats",
        response_model=StatsResponse,
        response_model_by_alias=True,
        tags=["Solver"],
    )
    def get_stats() -> StatsResponse:
        return StatsResponse(**api_service.get_stats())

    @app.post(
        "/api/game/clear-cache",
        response_model=ClearCacheResponse,
        response_model_by_alias=True,
        tags=["Solver"],
    )
    def clear_cache() -> ClearCacheResponse:
        api_service.clear_caches()
        return ClearCacheResponse()

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health() -> HealthResponse:
        return HealthResponse(version=__version__, environment=QUEENSDUEL_ENV)

    return app


# For running directly: uvicorn queensduel.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
