"""
Game Loop - Plays a match between two AI strategies.

The loop:
1. Start from an initialized GameState
2. Ask the dispatcher for the current player's move
3. Record the turn
4. Repeat until the state is terminal

Used by the CLI `play` command and for strategy comparisons.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging

from ..bots.dispatcher import StrategyDispatcher
from ..engine_core.context import SearchContext
from ..engine_core.state import GameState, PLAYER_ONE, PLAYER_TWO

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    GAME_OVER = "game_over"
    STALLED = "stalled"


@dataclass
class TurnResult:
    """One ply of a match."""
    ply: int
    player: int
    algorithm: str
    success: bool
    position: int | None = None
    message: str = ""
    errors: list[str] = field(default_factory=list)


@dataclass
class MatchResult:
    """Outcome of a full match."""
    loop_state: LoopState
    final_state: GameState
    turns: list[TurnResult] = field(default_factory=list)

    @property
    def winner(self) -> int | None:
        return self.final_state.winner

    @property
    def moves(self) -> list[int]:
        return [t.position for t in self.turns if t.position is not None]


class GameLoop:
    """
    The match driver.

    Usage:
        loop = GameLoop(init_game(6, regions), {1: "minimax", 2: "greedy"})
        match = loop.run()
        print(match.winner, match.moves)
    """

    def __init__(
        self,
        state: GameState,
        algorithms: dict[int, str],
        dispatcher: StrategyDispatcher | None = None,
        context_factory: Callable[[], SearchContext] = SearchContext,
    ):
        missing = {PLAYER_ONE, PLAYER_TWO} - set(algorithms)
        if missing:
            raise ValueError(f"No algorithm for player(s): {sorted(missing)}")
        self.state = state
        self.algorithms = dict(algorithms)
        self.dispatcher = dispatcher or StrategyDispatcher()
        self.context_factory = context_factory
        self.turns: list[TurnResult] = []
        self.loop_state = LoopState.GAME_OVER if state.game_over else LoopState.RUNNING

    def step(self) -> TurnResult:
        """Play one ply for the player to act."""
        if self.loop_state is not LoopState.RUNNING:
            raise RuntimeError(f"Game loop is not running ({self.loop_state.value})")

        player = self.state.current_player
        algorithm = self.algorithms[player]
        result = self.dispatcher.get_ai_move(self.state, algorithm, self.context_factory())

        if not result.success:
            turn = TurnResult(
                ply=len(self.turns),
                player=player,
                algorithm=algorithm,
                success=False,
                message=result.error or "",
                errors=[result.error or "move rejected"],
            )
            self.loop_state = LoopState.STALLED
            self.turns.append(turn)
            return turn

        self.state = result.new_state
        turn = TurnResult(
            ply=len(self.turns),
            player=player,
            algorithm=algorithm,
            success=True,
            position=result.position,
            message=self.state.message,
        )
        self.turns.append(turn)
        logger.debug("Ply %d: player %d (%s) -> %s", turn.ply, player, algorithm, result.position)

        if self.state.game_over:
            self.loop_state = LoopState.GAME_OVER
        return turn

    def run(self) -> MatchResult:
        """Play until the game ends. Bounded by N² plies."""
        limit = self.state.n * self.state.n + 1
        while self.loop_state is LoopState.RUNNING and len(self.turns) < limit:
            self.step()
        return MatchResult(
            loop_state=self.loop_state,
            final_state=self.state,
            turns=list(self.turns),
        )
