"""Run several searchers on one instance and compare their answers.

Every searcher is optimal, so on a solvable instance they must all report the
same cost; disagreement points at a bug in one of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from bidir_search.core.data_models import SearchResult
from bidir_search.domains.base import SearchDomain

from .astar import AStarSearcher
from .base import SearchConfig, Searcher
from .gbfhs import GBFHSSearcher
from .mme import MMeSearcher

logger = logging.getLogger(__name__)


SEARCHERS = {
    MMeSearcher.name: MMeSearcher,
    GBFHSSearcher.name: GBFHSSearcher,
    AStarSearcher.name: AStarSearcher,
}


def create_searcher(name: str, config: Optional[SearchConfig] = None) -> Searcher:
    """Create a searcher by name ('mme', 'gbfhs' or 'astar')."""
    try:
        searcher_cls = SEARCHERS[name]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {name} (expected one of {list(SEARCHERS)})") from None
    return searcher_cls(config)


@dataclass
class CrossCheckReport:
    """Results of every algorithm on one instance."""
    results: Dict[str, SearchResult] = field(default_factory=dict)

    @property
    def costs(self) -> Dict[str, Any]:
        return {name: result.optimal_cost for name, result in self.results.items()}

    @property
    def agree(self) -> bool:
        """True when every completed run reported the same cost."""
        completed = [result.optimal_cost for result in self.results.values()
                     if result.termination_reason != 'budget_exhausted']
        return len(set(completed)) <= 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'agree': self.agree,
            'costs': self.costs,
            'results': {name: result.to_dict() for name, result in self.results.items()},
        }


def cross_check(domain: SearchDomain, initial: Any, goal: Any,
                algorithms: Iterable[str] = tuple(SEARCHERS),
                config: Optional[SearchConfig] = None) -> CrossCheckReport:
    """Solve one instance with each algorithm and report whether they agree."""
    report = CrossCheckReport()
    for name in algorithms:
        report.results[name] = create_searcher(name, config).search(domain, initial, goal)
    if not report.agree:
        logger.warning(f"Algorithms disagree on {initial!r} -> {goal!r}: {report.costs}")
    return report


def available_algorithms() -> List[str]:
    return list(SEARCHERS)
