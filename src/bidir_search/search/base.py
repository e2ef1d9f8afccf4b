"""Shared configuration and driver for all searchers."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from bidir_search.core.context import BudgetExhausted, SearchContext
from bidir_search.core.data_models import Direction, SearchResult, finite_or_none
from bidir_search.domains.base import Problem, SearchDomain

from .frontier import Frontier
from .selection import PICKERS

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration shared by the MMe, GBFHS and A* searchers."""
    eps: int = 1  # Cheapest move cost in the domain
    picker: str = "uniform_random"  # GBFHS node selection strategy
    seed: Optional[int] = None  # Seed for the per-query random source
    check_invariants: bool = False  # Verify frontier bookkeeping after each expansion
    max_expansions: Optional[int] = None
    max_computation_time: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.eps, int) or isinstance(self.eps, bool) or self.eps < 1:
            raise ValueError(f"eps must be a positive integer, got {self.eps!r}")
        if self.picker not in PICKERS:
            raise ValueError(f"picker must be one of {list(PICKERS)}, got {self.picker!r}")
        if self.max_expansions is not None and self.max_expansions < 0:
            raise ValueError(f"max_expansions must be non-negative, got {self.max_expansions}")
        if self.max_computation_time is not None and self.max_computation_time <= 0:
            raise ValueError(
                f"max_computation_time must be positive, got {self.max_computation_time}"
            )

    @classmethod
    def from_config(cls, cfg: Any) -> 'SearchConfig':
        """Build from a loaded configuration (the ``search`` group is used)."""
        search_cfg = cfg.get('search', {}) if cfg is not None else {}
        if search_cfg is None:
            search_cfg = {}
        max_expansions = search_cfg.get('max_expansions')
        max_time = search_cfg.get('max_computation_time')
        seed = search_cfg.get('seed')
        return cls(
            eps=int(search_cfg.get('eps', 1)),
            picker=str(search_cfg.get('picker', 'uniform_random')),
            seed=int(seed) if seed is not None else None,
            check_invariants=bool(search_cfg.get('check_invariants', False)),
            max_expansions=int(max_expansions) if max_expansions is not None else None,
            max_computation_time=float(max_time) if max_time is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'eps': self.eps,
            'picker': self.picker,
            'seed': self.seed,
            'check_invariants': self.check_invariants,
            'max_expansions': self.max_expansions,
            'max_computation_time': self.max_computation_time,
        }


class Searcher(ABC):
    """Runs one query per ``search`` call.

    Subclasses implement ``_run``, which returns a termination reason and keeps
    the best known cost in ``context.best``.
    """

    name: str = "abstract"

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        logger.info(f"{self.name} searcher initialized with eps={self.config.eps}, "
                    f"picker={self.config.picker}, seed={self.config.seed}")

    def new_context(self) -> SearchContext:
        return SearchContext(
            seed=self.config.seed,
            max_expansions=self.config.max_expansions,
            max_computation_time=self.config.max_computation_time,
            check_invariants=self.config.check_invariants,
        )

    def search(self, domain: SearchDomain, initial: Any, goal: Any,
               context: Optional[SearchContext] = None) -> SearchResult:
        """Find the minimum number of moves from ``initial`` to ``goal``.

        Args:
            domain: State domain supplying successors and heuristics
            initial: Initial state
            goal: Goal state
            context: Optional pre-built context (fresh one per query otherwise)

        Returns:
            SearchResult with the optimal cost, or cost None when unsolvable

        Raises:
            InvalidStateError: If the initial/goal pair is malformed
        """
        problem = Problem(domain, initial, goal)
        if self.config.eps > domain.move_cost:
            logger.warning(f"{self.name}: eps={self.config.eps} exceeds the {domain.name} "
                           f"move cost {domain.move_cost}; bounds overestimate and the "
                           f"search may exhaust the state space")
        context = context or self.new_context()
        start_time = time.perf_counter()

        if problem.is_trivial():
            logger.info(f"{self.name}: initial state equals goal")
            return self._build_result(context, 'trivial', start_time, cost=0)

        try:
            reason = self._run(problem, context)
        except BudgetExhausted as e:
            logger.warning(f"{self.name}: search stopped early ({e}); "
                           f"best known cost {finite_or_none(context.best)}")
            return self._build_result(context, 'budget_exhausted', start_time, cost=None)

        result = self._build_result(context, reason, start_time, cost=finite_or_none(context.best))
        logger.info(f"{self.name}: {reason} with cost {result.optimal_cost} after "
                    f"{result.nodes_expanded} expansions in {result.computation_time:.3f}s")
        return result

    @abstractmethod
    def _run(self, problem: Problem, context: SearchContext) -> str:
        """Search until termination; return 'solved' or 'unsolvable'."""

    def _build_result(self, context: SearchContext, reason: str, start_time: float,
                      cost: Optional[int]) -> SearchResult:
        return SearchResult(
            algorithm=self.name,
            cost=cost,
            nodes_expanded=context.statistics.nodes_expanded,
            nodes_generated=context.statistics.nodes_generated,
            computation_time=time.perf_counter() - start_time,
            termination_reason=reason,
            best_known=finite_or_none(context.best) if reason != 'trivial' else 0,
            statistics=context.statistics,
        )

    @staticmethod
    def _check_frontiers(context: SearchContext, frontiers: Iterable[Frontier]) -> None:
        if context.check_invariants:
            for frontier in frontiers:
                frontier.check_invariants()


def outcome(context: SearchContext) -> str:
    """Reason for a run that ended because a frontier emptied."""
    return 'solved' if finite_or_none(context.best) is not None else 'unsolvable'


def expand(problem: Problem, frontiers: Dict[Direction, Frontier], direction: Direction,
           state: Any, context: SearchContext):
    """Close ``state`` and yield each successor whose cost improved.

    Successors that are already known at a cost no greater than the new one
    are skipped. Improved successors are (re)opened before being yielded.
    """
    frontier = frontiers[direction]
    frontier.close(state)
    successors = problem.successors(state, direction)
    context.count_expansion(len(successors))
    new_cost = frontier.g[state] + 1
    for successor in successors:
        was_closed = successor in frontier.closed
        if frontier.relax(successor, new_cost):
            if was_closed:
                context.statistics.nodes_reopened += 1
            yield successor
        else:
            context.statistics.duplicate_states += 1
