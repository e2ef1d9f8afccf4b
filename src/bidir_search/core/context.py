"""Per-query search context.

Every query owns one ``SearchContext``: its counters, its random source and
its budget. Nothing here is shared between queries, so independent queries
can run in parallel without locking.
"""

from __future__ import annotations

import random
import time
from typing import Optional

from .data_models import INFINITY, SearchStatistics


class BudgetExhausted(Exception):
    """Internal signal used to unwind an engine when its budget runs out."""
    pass


class SearchContext:
    """Counters, randomness and budget for a single search query."""

    def __init__(self,
                 seed: Optional[int] = None,
                 max_expansions: Optional[int] = None,
                 max_computation_time: Optional[float] = None,
                 check_invariants: bool = False):
        """Initialize search context.

        Args:
            seed: Seed for the context's random source (None for OS entropy)
            max_expansions: Stop after this many expansions (None for no limit)
            max_computation_time: Stop after this many seconds (None for no limit)
            check_invariants: Verify frontier bookkeeping after every expansion
        """
        self.rng = random.Random(seed)
        self.statistics = SearchStatistics()
        self.max_expansions = max_expansions
        self.max_computation_time = max_computation_time
        self.check_invariants = check_invariants
        self.start_time = time.perf_counter()
        # Best solution cost found so far (U in MMe, best in GBFHS)
        self.best: float = INFINITY
        # GBFHS bounds
        self.f_lim = 0
        self.g_lim_f = 0
        self.g_lim_b = 0

    @property
    def nodes_expanded(self) -> int:
        return self.statistics.nodes_expanded

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.start_time

    def count_expansion(self, num_successors: int) -> None:
        self.statistics.nodes_expanded += 1
        self.statistics.nodes_generated += num_successors

    def check_budget(self) -> None:
        """Raise ``BudgetExhausted`` if a configured limit has been reached.

        Engines call this only where frontier and cost-store bookkeeping is
        consistent: the top of an outer iteration or of a level-expansion step.
        """
        if self.max_expansions is not None and self.statistics.nodes_expanded >= self.max_expansions:
            raise BudgetExhausted(f"expansion limit {self.max_expansions} reached")
        if self.max_computation_time is not None and self.elapsed >= self.max_computation_time:
            raise BudgetExhausted(f"time limit {self.max_computation_time}s reached")

    def record_collision(self, cost: int) -> bool:
        """Fold a meeting-point cost into ``best``; True if it improved."""
        self.statistics.collisions += 1
        if cost < self.best:
            self.best = cost
            return True
        return False

    def record_bounds(self) -> None:
        self.statistics.bound_trace.append((self.f_lim, self.g_lim_f, self.g_lim_b))
