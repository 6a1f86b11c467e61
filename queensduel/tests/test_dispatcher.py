"""
Tests for the strategy dispatcher and the match loop.

Tests:
- Routing by algorithm tag
- Fallback and forfeit when a policy has no move
- Error results for unknown tags and finished games
- Full AI vs AI matches
"""

import pytest

from ..bots.dispatcher import StrategyDispatcher, POLICIES, create_policy, get_ai_move
from ..bots.dnc import DnCPolicy
from ..bots.greedy import GreedyPolicy
from ..bots.minimax import MinimaxPolicy
from ..engine_core.board import is_legal_placement
from ..engine_core.context import SearchContext
from ..engine_core.errors import ErrorCode, UnknownAlgorithmError
from ..engine_core.reducer import init_game, commit_move
from ..engine_core.state import GameState, PLAYER_ONE, PLAYER_TWO
from ..session import GameLoop, LoopState
from .conftest import SCATTERED_4, row_regions


class TestCreatePolicy:
    """Tests for the policy table."""

    def test_tags(self):
        assert set(POLICIES) == {"greedy", "minimax", "dp", "dnc"}
        assert isinstance(create_policy("greedy"), GreedyPolicy)
        assert isinstance(create_policy("dp"), DnCPolicy)
        assert isinstance(create_policy("DNC"), DnCPolicy)

    def test_minimax_depth_passed(self):
        policy = create_policy("minimax", minimax_depth=3)
        assert isinstance(policy, MinimaxPolicy)
        assert policy.depth == 3

    def test_unknown_tag(self):
        with pytest.raises(UnknownAlgorithmError) as exc:
            create_policy("random")
        assert exc.value.code == ErrorCode.UNKNOWN_ALGORITHM


class TestStrategyDispatcher:
    """Tests for StrategyDispatcher.get_ai_move()."""

    @pytest.mark.parametrize("algorithm", ["greedy", "minimax", "dp", "dnc"])
    def test_commits_a_valid_move(self, scattered_state, algorithm):
        result = StrategyDispatcher(minimax_depth=3).get_ai_move(scattered_state, algorithm)
        assert result.success
        assert result.position in scattered_state.valid_moves
        assert result.new_state.queen_positions == (result.position,)
        assert result.new_state.current_player == PLAYER_TWO

    def test_default_is_greedy(self, corner_opening):
        result = get_ai_move(corner_opening)
        assert result.position == 6

    def test_winning_move_ends_game(self, winning_position):
        result = get_ai_move(winning_position, "minimax")
        assert result.new_state.game_over
        assert result.new_state.winner == PLAYER_ONE

    def test_explanation_logged(self, winning_position):
        result = get_ai_move(winning_position, "greedy")
        assert result.state_changes[-1].startswith("Immediate win")

    def test_falls_back_to_greedy(self, corner_opening):
        # No completion exists from the corner, so dnc has nothing to offer
        result = get_ai_move(corner_opening, "dnc")
        assert result.success
        assert result.position == 6

    def test_forfeit_when_stuck(self, rows_4):
        stuck = GameState(
            n=4,
            regions=tuple(rows_4),
            queen_positions=(0, 7, 9),
            current_player=PLAYER_TWO,
            player1_queens=2,
            player2_queens=1,
        )
        result = get_ai_move(stuck, "minimax")
        assert result.success
        assert result.position is None
        assert result.new_state.game_over
        assert result.new_state.winner == PLAYER_ONE

    def test_unknown_algorithm(self, scattered_state):
        result = get_ai_move(scattered_state, "random")
        assert not result.success
        assert result.error_code == ErrorCode.UNKNOWN_ALGORITHM
        assert result.new_state.queen_positions == ()

    def test_game_over(self, winning_position):
        over = commit_move(winning_position, 9).new_state
        result = get_ai_move(over)
        assert not result.success
        assert result.error_code == ErrorCode.GAME_OVER

    def test_budget_exhausted_falls_back(self, scattered_state):
        context = SearchContext(max_nodes=5)
        result = StrategyDispatcher().get_ai_move(scattered_state, "minimax", context)
        assert result.success
        # Greedy picks the answer once minimax gives up
        assert result.position == get_ai_move(scattered_state, "greedy").position


class TestGameLoop:
    """Tests for AI vs AI matches."""

    @pytest.mark.parametrize("p1,p2", [
        ("greedy", "greedy"),
        ("minimax", "greedy"),
        ("dnc", "minimax"),
    ])
    def test_match_finishes(self, p1, p2):
        state = init_game(5, row_regions(5))
        loop = GameLoop(state, {1: p1, 2: p2}, StrategyDispatcher(minimax_depth=3))
        match = loop.run()

        assert match.loop_state == LoopState.GAME_OVER
        assert match.winner in (PLAYER_ONE, PLAYER_TWO)
        assert is_legal_placement(match.moves, state.board)
        assert [t.player for t in match.turns][:2] == [PLAYER_ONE, PLAYER_TWO]

    def test_deterministic_replay(self):
        state = init_game(4, SCATTERED_4)
        first = GameLoop(state, {1: "greedy", 2: "minimax"}).run()
        second = GameLoop(state, {1: "greedy", 2: "minimax"}).run()
        assert first.moves == second.moves
        assert first.winner == second.winner

    def test_missing_algorithm(self, scattered_state):
        with pytest.raises(ValueError):
            GameLoop(scattered_state, {1: "greedy"})

    def test_finished_game_does_not_step(self, winning_position):
        over = commit_move(winning_position, 9).new_state
        loop = GameLoop(over, {1: "greedy", 2: "greedy"})
        assert loop.loop_state == LoopState.GAME_OVER
        with pytest.raises(RuntimeError):
            loop.step()

    def test_unknown_algorithm_stalls(self, scattered_state):
        loop = GameLoop(scattered_state, {1: "random", 2: "greedy"})
        match = loop.run()
        assert match.loop_state == LoopState.STALLED
        assert not match.turns[-1].success
        assert match.final_state.queen_positions == ()
