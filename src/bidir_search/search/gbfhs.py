"""GBFHS: general breadth-first heuristic search.

Outer iterations raise a lower bound ``fLim`` on the optimal cost one unit at
a time. For each ``fLim`` the g-limit budget ``gLim_F + gLim_B = fLim - eps + 1``
is split between the directions and every open node with ``f_D <= fLim`` and
``g_D < gLim_D`` is expanded. Once the best meeting cost equals ``fLim`` it is
provably optimal.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from bidir_search.core.context import SearchContext
from bidir_search.core.data_models import Direction, SearchResult
from bidir_search.domains.base import Problem, SearchDomain

from .base import SearchConfig, Searcher, expand, outcome
from .evaluators import is_node_expandable, split
from .frontier import Frontier, collision_cost, make_frontiers
from .selection import ExpandableSet, NodePicker, create_picker

logger = logging.getLogger(__name__)


class GBFHSSearcher(Searcher):
    """Front-to-front bidirectional search with negotiated g-limits."""

    name = "gbfhs"

    def _run(self, problem: Problem, context: SearchContext) -> str:
        eps = self.config.eps
        picker = create_picker(self.config.picker, context.rng)
        frontiers = make_frontiers(problem.endpoint(Direction.FORWARD),
                                   problem.endpoint(Direction.BACKWARD))

        context.f_lim = max(problem.h(problem.initial, Direction.FORWARD),
                            problem.h(problem.goal, Direction.BACKWARD),
                            eps)
        context.g_lim_f = 0
        context.g_lim_b = 0

        while frontiers[Direction.FORWARD] and frontiers[Direction.BACKWARD]:
            context.check_budget()
            if context.best == context.f_lim:
                return 'solved'
            context.statistics.outer_iterations += 1

            g_lim_sum = context.f_lim - eps + 1
            context.g_lim_f, context.g_lim_b = split(g_lim_sum, context.g_lim_f, context.g_lim_b)
            context.record_bounds()
            logger.debug(f"GBFHS: fLim={context.f_lim} gLim_F={context.g_lim_f} "
                         f"gLim_B={context.g_lim_b} expanded={context.nodes_expanded}")

            self._expand_level(problem, frontiers, picker, context)
            if context.best == context.f_lim:
                return 'solved'
            context.f_lim += 1

        logger.debug(f"GBFHS: a frontier emptied at fLim={context.f_lim}")
        return outcome(context)

    def _g_lim(self, context: SearchContext, direction: Direction) -> int:
        return context.g_lim_f if direction is Direction.FORWARD else context.g_lim_b

    def _expand_level(self, problem: Problem, frontiers: Dict[Direction, Frontier],
                      picker: NodePicker, context: SearchContext) -> None:
        """Expand every node eligible under the current bounds.

        Returns early as soon as a collision brings ``best`` down to ``fLim``.
        """
        f_lim = context.f_lim
        expandable: Dict[Direction, ExpandableSet] = {}
        for direction, frontier in frontiers.items():
            g_lim = self._g_lim(context, direction)
            eligible = ExpandableSet()
            for state in frontier.open:
                if is_node_expandable(frontier, problem, state, f_lim, g_lim):
                    eligible.add(state)
            expandable[direction] = eligible

        while expandable[Direction.FORWARD] or expandable[Direction.BACKWARD]:
            context.check_budget()
            direction, node = picker.pick(expandable[Direction.FORWARD], expandable[Direction.BACKWARD])
            expandable[direction].discard(node)
            frontier = frontiers[direction]
            opposite = frontiers[direction.opposite]
            g_lim = self._g_lim(context, direction)

            for successor in expand(problem, frontiers, direction, node, context):
                if is_node_expandable(frontier, problem, successor, f_lim, g_lim):
                    expandable[direction].add(successor)
                cost = collision_cost(frontier, opposite, successor)
                if cost is not None:
                    context.record_collision(cost)
                    if context.best <= f_lim:
                        logger.debug(f"GBFHS: best={context.best} meets fLim, level aborted")
                        self._check_frontiers(context, frontiers.values())
                        return

            self._check_frontiers(context, frontiers.values())


def create_gbfhs_searcher(**kwargs: Any) -> GBFHSSearcher:
    """Create a GBFHS searcher; keyword arguments become ``SearchConfig`` fields."""
    return GBFHSSearcher(SearchConfig(**kwargs))


def gbfhs_search(domain: SearchDomain, initial: Any, goal: Any,
                 eps: int = 1, config: Optional[SearchConfig] = None) -> SearchResult:
    """Run GBFHS once; ``eps`` is ignored when ``config`` is given."""
    return GBFHSSearcher(config or SearchConfig(eps=eps)).search(domain, initial, goal)
