"""
Tests for whole-board solvers.

Tests:
- Every solved result is a full legal placement
- Unsolvable boards fail cleanly
- Node budgets
- MRV completion of partial placements
- Input validation through solve()
"""

import pytest

from ..engine_core.board import Board, is_full_solution
from ..engine_core.context import SearchContext
from ..engine_core.errors import ErrorCode
from ..solvers import solve, ALGORITHMS, ExhaustiveSolver, MRVSolver, GreedySolver
from ..solvers.constraints import BitBoard, Masks
from .conftest import SCATTERED_4, UNSOLVABLE_4, IRREGULAR_5, row_regions


class TestExhaustiveSolver:
    """Tests for the row-order bitmask solver."""

    def test_first_solution_in_row_order(self, rows_4_board):
        solution = ExhaustiveSolver().solve(rows_4_board)
        assert solution.solved
        assert solution.queen_positions == [1, 7, 8, 14]
        assert solution.algorithm == "dp"

    def test_irregular_regions(self):
        board = Board.create(5, IRREGULAR_5)
        solution = ExhaustiveSolver().solve(board)
        assert solution.solved
        assert is_full_solution(solution.queen_positions, board)

    @pytest.mark.parametrize("regions", [UNSOLVABLE_4, SCATTERED_4])
    def test_unsolvable(self, regions):
        solution = ExhaustiveSolver().solve(Board.create(4, regions))
        assert not solution.solved
        assert solution.queen_positions == []
        assert solution.message == "No solution found using bitmask backtracking"
        assert solution.error_code is None

    def test_budget_exceeded(self):
        context = SearchContext(max_nodes=1)
        solution = ExhaustiveSolver().solve(Board.create(4, UNSOLVABLE_4), context)
        assert not solution.solved
        assert solution.error_code == ErrorCode.SEARCH_BUDGET_EXCEEDED
        assert solution.message == "Search budget of 1 nodes exceeded"

    def test_dead_ends_recorded(self, context):
        ExhaustiveSolver().solve(Board.create(8, row_regions(8)), context)
        assert context.stats.memo_size > 0
        assert context.stats.nodes > 0


class TestMRVSolver:
    """Tests for the most-constrained-row solver."""

    @pytest.mark.parametrize("n", [4, 5, 6, 8])
    def test_plain_queens(self, n):
        board = Board.create(n, row_regions(n))
        solution = MRVSolver().solve(board)
        assert solution.solved
        assert is_full_solution(solution.queen_positions, board)

    def test_unsolvable(self):
        solution = MRVSolver().solve(Board.create(4, UNSOLVABLE_4))
        assert not solution.solved
        assert solution.error_code is None

    def test_completes_partial_placement(self, rows_4_board):
        solution = MRVSolver().solve(rows_4_board, placed=[14])
        assert solution.solved
        assert solution.queen_positions[0] == 14
        assert sorted(solution.queen_positions) == [1, 7, 8, 14]

    def test_partial_without_completion(self, rows_4_board):
        solution = MRVSolver().solve(rows_4_board, placed=(0,))
        assert not solution.solved
        assert solution.queen_positions == [0]

    def test_illegal_start_rejected(self, rows_4_board):
        solution = MRVSolver().solve(rows_4_board, placed=[0, 5])
        assert not solution.solved
        assert solution.error_code == ErrorCode.ILLEGAL_MOVE

    def test_budget_keeps_start(self, rows_4_board):
        solution = MRVSolver().solve(rows_4_board, SearchContext(max_nodes=1), placed=[1])
        assert solution.error_code == ErrorCode.SEARCH_BUDGET_EXCEEDED
        assert solution.queen_positions == [1]


class TestGreedySolver:
    """Tests for the constructive solver."""

    def test_result_is_legal_when_solved(self):
        for n in (4, 5, 6, 7, 8):
            board = Board.create(n, row_regions(n))
            solution = GreedySolver().solve(board)
            if solution.solved:
                assert is_full_solution(solution.queen_positions, board)
            else:
                assert solution.message.startswith("Cannot place queen in region")

    def test_unsolvable_reports_region(self):
        solution = GreedySolver().solve(Board.create(4, UNSOLVABLE_4))
        assert not solution.solved
        assert "No valid positions available." in solution.message
        assert len(solution.queen_positions) < 4

    def test_single_cell(self):
        solution = GreedySolver().solve(Board.create(1, [0]))
        assert solution.solved
        assert solution.queen_positions == [0]


class TestSolveEntry:
    """Tests for the solve() facade."""

    @pytest.mark.parametrize("algorithm", ["dp", "dnc", "greedy", "minimax"])
    def test_round_trip_legality(self, algorithm):
        board = Board.create(5, IRREGULAR_5)
        solution = solve(5, IRREGULAR_5, algorithm)
        assert solution.algorithm == algorithm
        if solution.solved:
            assert is_full_solution(solution.queen_positions, board)

    def test_default_is_exhaustive(self):
        solution = solve(4, row_regions(4))
        assert solution.algorithm == "dp"
        assert solution.solved

    def test_algorithm_case_insensitive(self):
        assert solve(4, row_regions(4), "DNC").algorithm == "dnc"

    def test_unknown_algorithm(self):
        solution = solve(4, row_regions(4), "bogus")
        assert not solution.solved
        assert solution.error_code == ErrorCode.UNKNOWN_ALGORITHM
        assert "bogus" in solution.message

    def test_bad_size(self):
        solution = solve(4, [0, 1, 2, 3])
        assert not solution.solved
        assert solution.error_code == ErrorCode.INVALID_REGIONS_SIZE
        assert solution.message == "Invalid regions array. Expected size: 16, found 4"

    def test_bad_region_count(self):
        solution = solve(4, [0] * 16)
        assert not solution.solved
        assert solution.error_code == ErrorCode.INVALID_REGION_COUNT

    def test_algorithms_listed(self):
        assert ALGORITHMS == ["dnc", "dp", "greedy", "minimax"]

    def test_stats_reported(self):
        solution = solve(6, row_regions(6), "dp")
        assert solution.stats["nodes"] > 0


class TestBitBoard:
    """Tests for the constraint masks."""

    def test_regions_remapped_densely(self):
        regions = [r * 3 + 100 for r in row_regions(4)]
        bits = BitBoard.from_board(Board.create(4, regions))
        assert set(bits.region_bits) == {0, 1, 2, 3}
        assert bits.region_ids == (100, 103, 106, 109)

    def test_place_blocks_lines(self, rows_4_board):
        bits = BitBoard.from_board(rows_4_board)
        masks = bits.place(Masks(), 0, 0)
        assert not bits.allows(masks, 1, 1)
        assert not bits.allows(masks, 3, 0)
        assert bits.allows(masks, 1, 2)
        assert bits.open_columns(masks, 2) == [1, 3]

    def test_masks_for_matches_place(self, rows_4_board):
        bits = BitBoard.from_board(rows_4_board)
        by_place = bits.place(bits.place(Masks(), 0, 1), 1, 3)
        assert bits.masks_for([1, 7]) == by_place
