"""Unidirectional A* baseline.

Used to cross-check the optimal costs reported by the bidirectional engines.
Closed states are re-opened when a cheaper path to them turns up, so the
baseline stays optimal even with an inconsistent heuristic.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bidir_search.core.context import SearchContext
from bidir_search.core.data_models import Direction, SearchResult, State
from bidir_search.domains.base import Problem, SearchDomain

from .base import SearchConfig, Searcher

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """Entry in the A* priority queue."""
    state: State = field(compare=False)
    cost: int  # g(n) - moves from the initial state
    heuristic: int  # h(n) - estimate to the goal

    @property
    def f_score(self) -> int:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.cost + self.heuristic

    def __lt__(self, other: 'SearchNode') -> bool:
        """Lower f first; on ties prefer the deeper node (closer to the goal)."""
        if self.f_score != other.f_score:
            return self.f_score < other.f_score
        return self.cost > other.cost


class AStarSearcher(Searcher):
    """A* over the forward direction of a problem."""

    name = "astar"

    def _run(self, problem: Problem, context: SearchContext) -> str:
        g: Dict[State, int] = {problem.initial: 0}
        closed = set()
        open_list: List[SearchNode] = [
            SearchNode(problem.initial, 0, problem.h(problem.initial, Direction.FORWARD))
        ]

        while open_list:
            context.check_budget()
            node = heapq.heappop(open_list)
            # Stale queue entry superseded by a cheaper path
            if node.cost > g[node.state] or node.state in closed:
                continue

            if problem.domain.is_goal(node.state, problem.goal):
                context.best = node.cost
                return 'solved'

            closed.add(node.state)
            successors = problem.successors(node.state, Direction.FORWARD)
            context.count_expansion(len(successors))
            new_cost = node.cost + 1
            for successor in successors:
                known = g.get(successor)
                if known is not None and known <= new_cost:
                    context.statistics.duplicate_states += 1
                    continue
                if successor in closed:
                    closed.discard(successor)
                    context.statistics.nodes_reopened += 1
                g[successor] = new_cost
                heapq.heappush(open_list, SearchNode(
                    successor, new_cost, problem.h(successor, Direction.FORWARD)
                ))

        return 'unsolvable'


def create_astar_searcher(**kwargs: Any) -> AStarSearcher:
    """Create an A* searcher; keyword arguments become ``SearchConfig`` fields."""
    return AStarSearcher(SearchConfig(**kwargs))


def astar_search(domain: SearchDomain, initial: Any, goal: Any,
                 config: Optional[SearchConfig] = None) -> SearchResult:
    """Run the A* baseline once."""
    return AStarSearcher(config).search(domain, initial, goal)
