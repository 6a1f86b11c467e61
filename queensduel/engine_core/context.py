"""
Search Context - Caches and counters passed explicitly into searches.

Every strategy and solver call takes a SearchContext instead of reaching
for module-level state. A context holds:
- the AttackCache (may be shared between calls and sessions)
- a memo table private to one search
- an optional node budget
- counters for diagnostics

StatsCollector aggregates counters across calls for the stats endpoint.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any
import threading

from .board import AttackCache
from .errors import SearchBudgetExceeded


@dataclass
class SearchStats:
    """Counters for one search."""
    nodes: int = 0
    memo_hits: int = 0
    memo_size: int = 0
    cutoffs: int = 0
    elapsed: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SearchContext:
    """
    Per-call search context.

    Usage:
        context = SearchContext(attack_cache=shared_cache, max_nodes=100_000)
        decision = MinimaxPolicy(depth=6).select_move(state, context)
        print(context.stats.nodes)
    """
    attack_cache: AttackCache = field(default_factory=AttackCache)
    max_nodes: int | None = None
    memo: dict[Any, Any] = field(default_factory=dict)
    stats: SearchStats = field(default_factory=SearchStats)

    def visit(self):
        """Count one expanded node, enforcing the budget."""
        self.stats.nodes += 1
        if self.max_nodes is not None and self.stats.nodes > self.max_nodes:
            raise SearchBudgetExceeded(self.max_nodes)

    def fork(self) -> SearchContext:
        """Fresh memo and counters, same shared cache and budget."""
        return SearchContext(attack_cache=self.attack_cache, max_nodes=self.max_nodes)


class StatsCollector:
    """
    Thread-safe running totals per algorithm.

    Searches write their own SearchStats without locking; only the
    merge into the totals is serialized.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._totals: dict[str, dict[str, float]] = {}

    def record(self, algorithm: str, stats: SearchStats):
        with self._lock:
            totals = self._totals.setdefault(
                algorithm,
                {"calls": 0, "nodes": 0, "memo_hits": 0, "cutoffs": 0, "elapsed": 0.0},
            )
            totals["calls"] += 1
            totals["nodes"] += stats.nodes
            totals["memo_hits"] += stats.memo_hits
            totals["cutoffs"] += stats.cutoffs
            totals["elapsed"] += stats.elapsed

    def snapshot(self) -> dict[str, dict[str, float]]:
        with self._lock:
            return {name: dict(values) for name, values in self._totals.items()}

    def clear(self):
        with self._lock:
            self._totals.clear()
