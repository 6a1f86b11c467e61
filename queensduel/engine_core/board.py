"""
Board - Board geometry, region partition and the legality oracle.

A board is N×N cells indexed row-major (position = row * N + col).
Each cell carries a region id; a valid board has exactly N distinct ids.

The oracle answers one question: can a queen go here given the queens
already placed? A cell is safe when it shares no row, column or
diagonal with a placed queen and its region holds no queen yet.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence
import threading

from .errors import ErrorCode, InvalidBoardError


@dataclass(frozen=True)
class Board:
    """
    Immutable board description.

    Use Board.create() to build one from untrusted input; it validates
    the region partition before anything else touches it.
    """
    n: int
    regions: tuple[int, ...]

    @classmethod
    def create(cls, n: int, regions: Sequence[int]) -> Board:
        """Validate and build a board."""
        if n < 1:
            raise InvalidBoardError(
                f"Board size must be positive, got {n}",
                ErrorCode.INVALID_REGIONS_SIZE,
            )
        if regions is None or len(regions) != n * n:
            found = 0 if regions is None else len(regions)
            raise InvalidBoardError(
                f"Invalid regions array. Expected size: {n * n}, found {found}",
                ErrorCode.INVALID_REGIONS_SIZE,
            )
        distinct = set(regions)
        if len(distinct) != n:
            raise InvalidBoardError(
                f"Invalid number of regions. Expected {n}, found {len(distinct)}",
                ErrorCode.INVALID_REGION_COUNT,
            )
        return cls(n=n, regions=tuple(int(r) for r in regions))

    @property
    def size(self) -> int:
        """Number of cells."""
        return self.n * self.n

    @property
    def center(self) -> int:
        return self.n // 2

    def row_col(self, position: int) -> tuple[int, int]:
        return divmod(position, self.n)

    def region_of(self, position: int) -> int:
        return self.regions[position]

    def distance_to_center(self, position: int) -> int:
        """Manhattan distance from a cell to (N // 2, N // 2)."""
        row, col = divmod(position, self.n)
        return abs(row - self.center) + abs(col - self.center)

    def region_ids(self) -> list[int]:
        """Distinct region ids in ascending order."""
        return sorted(set(self.regions))

    def region_cells(self) -> dict[int, list[int]]:
        """Map region id -> cells in that region (ascending)."""
        cells: dict[int, list[int]] = {}
        for position, region in enumerate(self.regions):
            cells.setdefault(region, []).append(position)
        return cells


def attacks(a: int, b: int, n: int) -> bool:
    """True if queens on cells a and b share a row, column or diagonal."""
    a_row, a_col = divmod(a, n)
    b_row, b_col = divmod(b, n)
    return (
        a_row == b_row
        or a_col == b_col
        or a_row - a_col == b_row - b_col
        or a_row + a_col == b_row + b_col
    )


def is_safe(position: int, placed_queens: Iterable[int], board: Board) -> bool:
    """
    Check whether a queen may be placed on a cell.

    O(k) for k placed queens.
    """
    region = board.regions[position]
    for queen in placed_queens:
        if queen == position:
            return False
        if board.regions[queen] == region:
            return False
        if attacks(position, queen, board.n):
            return False
    return True


def is_legal_placement(positions: Sequence[int], board: Board) -> bool:
    """
    Check that a set of queens is pairwise legal.

    Pairwise non-attacking, one queen per region at most, all on board.
    """
    seen: list[int] = []
    for position in positions:
        if not 0 <= position < board.size:
            return False
        if not is_safe(position, seen, board):
            return False
        seen.append(position)
    return True


def is_full_solution(positions: Sequence[int], board: Board) -> bool:
    """A legal placement with exactly one queen in each of the N regions."""
    return len(positions) == board.n and is_legal_placement(positions, board)


class AttackCache:
    """
    Precomputed attack patterns, one table per board size.

    table[p] is the frozenset of cells a queen on p attacks (p excluded).
    Tables are built once per N and then only read; building is guarded
    by a lock so concurrent sessions can share one cache.
    """

    def __init__(self):
        self._tables: dict[int, tuple[frozenset[int], ...]] = {}
        self._lock = threading.Lock()

    def table(self, n: int) -> tuple[frozenset[int], ...]:
        table = self._tables.get(n)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(n)
            if table is None:
                table = tuple(_attacked_cells(p, n) for p in range(n * n))
                self._tables[n] = table
        return table

    def attacked_by(self, position: int, n: int) -> frozenset[int]:
        return self.table(n)[position]

    def is_safe(self, position: int, placed_queens: Iterable[int], board: Board) -> bool:
        """Same answer as is_safe(), using set membership."""
        attacked = self.table(board.n)[position]
        region = board.regions[position]
        for queen in placed_queens:
            if queen == position or queen in attacked:
                return False
            if board.regions[queen] == region:
                return False
        return True

    def sizes(self) -> list[int]:
        """Board sizes with a cached table."""
        return sorted(self._tables)

    def clear(self):
        with self._lock:
            self._tables.clear()

    def __len__(self) -> int:
        return len(self._tables)


def _attacked_cells(position: int, n: int) -> frozenset[int]:
    row, col = divmod(position, n)
    attacked = set()

    for c in range(n):
        attacked.add(row * n + c)
    for r in range(n):
        attacked.add(r * n + col)

    for d in range(1, n):
        for dr, dc in ((d, d), (-d, -d), (d, -d), (-d, d)):
            r, c = row + dr, col + dc
            if 0 <= r < n and 0 <= c < n:
                attacked.add(r * n + c)

    attacked.discard(position)
    return frozenset(attacked)
