"""
Constraint bitmasks shared by the backtracking solvers.

Occupied columns, both diagonal families and regions are each held in a
single int, so a conflict test is a handful of AND operations:

    cols   bit col
    diag1  bit row - col + N - 1
    diag2  bit row + col
    regs   bit dense_region_index

Region ids are arbitrary labels on input; BitBoard remaps them to
0..N-1 (sorted id order) so each fits in one bit.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from ..engine_core.board import Board


@dataclass(frozen=True)
class Masks:
    """Occupancy masks for a (partial) placement."""
    cols: int = 0
    diag1: int = 0
    diag2: int = 0
    regs: int = 0
    rows: int = 0


@dataclass(frozen=True)
class BitBoard:
    """A Board with per-cell bit positions precomputed."""
    n: int
    region_bits: tuple[int, ...]
    region_ids: tuple[int, ...]

    @classmethod
    def from_board(cls, board: Board) -> BitBoard:
        ids = board.region_ids()
        dense = {region: index for index, region in enumerate(ids)}
        return cls(
            n=board.n,
            region_bits=tuple(dense[r] for r in board.regions),
            region_ids=tuple(ids),
        )

    def allows(self, masks: Masks, row: int, col: int) -> bool:
        """True if (row, col) conflicts with nothing in masks."""
        n = self.n
        if masks.cols >> col & 1:
            return False
        if masks.diag1 >> (row - col + n - 1) & 1:
            return False
        if masks.diag2 >> (row + col) & 1:
            return False
        return not masks.regs >> self.region_bits[row * n + col] & 1

    def place(self, masks: Masks, row: int, col: int) -> Masks:
        n = self.n
        return Masks(
            cols=masks.cols | 1 << col,
            diag1=masks.diag1 | 1 << (row - col + n - 1),
            diag2=masks.diag2 | 1 << (row + col),
            regs=masks.regs | 1 << self.region_bits[row * n + col],
            rows=masks.rows | 1 << row,
        )

    def masks_for(self, queens: Iterable[int]) -> Masks:
        """
        Masks for an existing placement.

        The queens must already be pairwise legal; callers check that
        with is_legal_placement() first.
        """
        masks = Masks()
        for position in queens:
            row, col = divmod(position, self.n)
            masks = self.place(masks, row, col)
        return masks

    def open_columns(self, masks: Masks, row: int) -> list[int]:
        """Columns of a row still available under masks."""
        return [col for col in range(self.n) if self.allows(masks, row, col)]
