"""MMe: meet-in-the-middle bidirectional heuristic search.

Each step scans both open sets, expands the node with the globally smallest
priority ``pr_D(n) = max(f_D(n), 2 * g_D(n) + eps)``, and stops once the best
meeting cost ``U`` is no larger than the lower bound

    max(C, fmin_F, fmin_B, gmin_F + gmin_B + eps)

where ``C`` is the smaller of the two minimum priorities.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from bidir_search.core.context import SearchContext
from bidir_search.core.data_models import Direction, SearchResult
from bidir_search.domains.base import Problem, SearchDomain

from .base import SearchConfig, Searcher, expand, outcome
from .evaluators import scan, select_direction
from .frontier import collision_cost, make_frontiers

logger = logging.getLogger(__name__)


class MMeSearcher(Searcher):
    """Bidirectional search expanding the globally most promising node."""

    name = "mme"

    def _run(self, problem: Problem, context: SearchContext) -> str:
        eps = self.config.eps
        frontiers = make_frontiers(problem.endpoint(Direction.FORWARD),
                                   problem.endpoint(Direction.BACKWARD))
        open_f = frontiers[Direction.FORWARD]
        open_b = frontiers[Direction.BACKWARD]

        while open_f and open_b:
            context.check_budget()
            context.statistics.outer_iterations += 1

            scan_f = scan(open_f, problem, eps)
            scan_b = scan(open_b, problem, eps)
            c = min(scan_f.prmin, scan_b.prmin)
            lower_bound = max(c, scan_f.fmin, scan_b.fmin, scan_f.gmin + scan_b.gmin + eps)
            if context.best <= lower_bound:
                logger.debug(f"MMe terminating: U={context.best} <= bound {lower_bound}")
                return 'solved'

            direction = select_direction(scan_f, scan_b)
            node = scan_f.node if direction is Direction.FORWARD else scan_b.node
            frontier = frontiers[direction]
            opposite = frontiers[direction.opposite]

            for successor in expand(problem, frontiers, direction, node, context):
                cost = collision_cost(frontier, opposite, successor)
                if cost is not None and context.record_collision(cost):
                    logger.debug(f"MMe: U improved to {cost}")

            self._check_frontiers(context, frontiers.values())

        logger.debug(f"MMe: a frontier emptied after {context.nodes_expanded} expansions")
        return outcome(context)


def create_mme_searcher(**kwargs: Any) -> MMeSearcher:
    """Create an MMe searcher; keyword arguments become ``SearchConfig`` fields."""
    return MMeSearcher(SearchConfig(**kwargs))


def mme_search(domain: SearchDomain, initial: Any, goal: Any,
               eps: int = 1, config: Optional[SearchConfig] = None) -> SearchResult:
    """Run MMe once; ``eps`` is ignored when ``config`` is given."""
    return MMeSearcher(config or SearchConfig(eps=eps)).search(domain, initial, goal)
