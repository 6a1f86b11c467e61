"""
Tests for the reducer (state transitions).

Tests:
- Initialization and reset
- Move validation
- Turn passing and queen counts
- Terminal conditions
- Checking states received from outside
"""

import pytest

from ..engine_core.action import Move
from ..engine_core.errors import ErrorCode, InvalidBoardError, InvalidStateError
from ..engine_core.reducer import Reducer, init_game, reset_game, commit_move, apply_move
from ..engine_core.state import GameState, GamePhase, PLAYER_ONE, PLAYER_TWO
from .conftest import SCATTERED_4, row_regions


class TestInitialize:
    """Tests for game initialization."""

    def test_fresh_game(self, scattered_state):
        state = scattered_state
        assert len(state.valid_moves) == 16
        assert not state.game_over
        assert state.current_player == PLAYER_ONE
        assert state.queen_positions == ()
        assert state.message == "Game initialized. Player 1's turn."
        assert state.phase == GamePhase.IN_PROGRESS

    def test_bad_partition_raises(self):
        with pytest.raises(InvalidBoardError):
            init_game(4, [0, 1, 2, 3])

    def test_reset_keeps_board(self, scattered_state):
        played = commit_move(scattered_state, 0).new_state
        fresh = reset_game(played)
        assert fresh.queen_positions == ()
        assert fresh.regions == tuple(SCATTERED_4)
        assert fresh == scattered_state

    def test_reset_with_new_partition(self, scattered_state):
        fresh = reset_game(scattered_state, row_regions(4))
        assert fresh.regions == tuple(row_regions(4))


class TestCommitMove:
    """Tests for placing queens."""

    def test_first_move_restricts_opponent(self, scattered_state):
        result = commit_move(scattered_state, 0)

        assert result.success
        state = result.new_state
        assert state.current_player == PLAYER_TWO
        assert state.queen_positions == (0,)
        assert state.player1_queens == 1
        assert state.player2_queens == 0
        # Row 0, column 0, the main diagonal and region 0 are gone
        assert state.valid_moves == (6, 7, 9, 11, 13, 14)
        assert state.message == "Player 2's turn. 6 valid moves available."

    def test_input_state_untouched(self, scattered_state):
        commit_move(scattered_state, 0)
        assert scattered_state.queen_positions == ()
        assert len(scattered_state.valid_moves) == 16

    def test_attacked_cell_rejected(self, scattered_state):
        state = commit_move(scattered_state, 0).new_state
        result = commit_move(state, 5)

        assert not result.success
        assert result.error_code == ErrorCode.ILLEGAL_MOVE
        assert result.new_state.message == "Invalid move! Queen would be under attack."
        assert result.new_state.queen_positions == state.queen_positions
        assert result.new_state.current_player == PLAYER_TWO

    def test_off_board_rejected(self, scattered_state):
        result = commit_move(scattered_state, 16)
        assert not result.success
        assert result.error_code == ErrorCode.ILLEGAL_MOVE

    def test_wrong_player_rejected(self, scattered_state):
        result = commit_move(scattered_state, 0, player=PLAYER_TWO)
        assert not result.success
        assert result.error_code == ErrorCode.NOT_YOUR_TURN

    def test_apply_move_record(self, scattered_state):
        move = Move.for_current_player(scattered_state, 9)
        result = apply_move(move)
        assert result.success
        assert result.position == 9
        assert result.state_changes == ["Player 1 placed a queen on 9"]


class TestTerminal:
    """Tests for the two ways a game ends."""

    def test_opponent_stuck(self, winning_position):
        result = commit_move(winning_position, 9)

        state = result.new_state
        assert state.game_over
        assert state.winner == PLAYER_ONE
        assert state.valid_moves == ()
        assert state.message == "Player 1 wins! Opponent has no valid moves."
        assert state.player1_queens == 2
        assert state.player2_queens == 1

    def test_all_regions_filled(self, rows_4_state):
        state = rows_4_state
        for position in (1, 7, 8):
            state = commit_move(state, position).new_state
        assert not state.game_over
        assert state.valid_moves == (14,)

        state = commit_move(state, 14).new_state
        assert state.game_over
        assert state.winner == PLAYER_TWO
        assert len(state.queen_positions) == state.n
        assert state.message == "Player 2 wins! All 4 regions are filled."

    def test_no_moves_after_game_over(self, winning_position):
        over = commit_move(winning_position, 9).new_state
        result = commit_move(over, 14)
        assert not result.success
        assert result.error_code == ErrorCode.GAME_OVER

    def test_forfeit(self, rows_4_state):
        stuck = GameState(
            n=4,
            regions=rows_4_state.regions,
            queen_positions=(0, 7, 9),
            current_player=PLAYER_TWO,
            player1_queens=2,
            player2_queens=1,
        )
        final = Reducer().forfeit(stuck)
        assert final.game_over
        assert final.winner == PLAYER_ONE
        assert final.message == "Player 1 wins! Player 2 has no valid moves."


class TestCheckState:
    """Tests for validating states sent by clients."""

    def test_accepts_played_state(self, winning_position):
        assert Reducer().check(winning_position) is winning_position

    def test_rejects_attacking_queens(self, rows_4_state):
        bad = rows_4_state._copy_with(queen_positions=(0, 5), player1_queens=1, player2_queens=1)
        with pytest.raises(InvalidStateError) as exc:
            Reducer().check(bad)
        assert exc.value.code == ErrorCode.INVALID_STATE

    def test_rejects_count_mismatch(self, rows_4_state):
        bad = rows_4_state._copy_with(queen_positions=(0,), player1_queens=0)
        with pytest.raises(InvalidStateError):
            Reducer().check(bad)

    def test_rejects_bad_board(self):
        with pytest.raises(InvalidBoardError):
            Reducer().check(GameState(n=3, regions=(0, 1, 2)))

    def test_refresh_recomputes_moves(self, corner_opening):
        stale = corner_opening._copy_with(valid_moves=())
        fresh = Reducer().refresh(stale)
        assert fresh.valid_moves == corner_opening.valid_moves
        assert fresh.message == "6 valid moves available."
