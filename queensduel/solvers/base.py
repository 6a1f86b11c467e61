"""
Solver results.

A Solution is the output of a whole-board solve: an ordered list of
queen positions, whether it is a complete legal placement, and a
diagnostic message. Failures use the same shape with solved=False.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.errors import ErrorCode


@dataclass
class Solution:
    """
    Result of a standalone solve.

    solved=True guarantees queen_positions is a full legal placement:
    N queens, pairwise non-attacking, one per region.
    """
    queen_positions: list[int]
    solved: bool
    message: str
    algorithm: str = ""
    error_code: ErrorCode | None = None
    stats: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        positions: list[int],
        algorithm: str,
        message: str,
        stats: dict[str, Any] | None = None,
    ) -> Solution:
        return cls(
            queen_positions=list(positions),
            solved=True,
            message=message,
            algorithm=algorithm,
            stats=stats or {},
        )

    @classmethod
    def failure(
        cls,
        message: str,
        algorithm: str,
        error_code: ErrorCode | None = None,
        positions: list[int] | None = None,
        stats: dict[str, Any] | None = None,
    ) -> Solution:
        """Create a failure result; positions may hold a partial placement."""
        return cls(
            queen_positions=list(positions or []),
            solved=False,
            message=message,
            algorithm=algorithm,
            error_code=error_code,
            stats=stats or {},
        )
