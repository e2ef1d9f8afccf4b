"""Explicit undirected graph domain with unit edge costs."""

from __future__ import annotations

import random
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple

from bidir_search.core.data_models import Direction, State
from bidir_search.core.exceptions import InvalidStateError

from .base import SearchDomain


class ExplicitGraphDomain(SearchDomain):
    """Nodes and edges given up front; heuristic from an optional lookup table.

    ``heuristic_table`` maps ``(state, target)`` to an admissible estimate;
    missing entries count as 0.
    """

    name = "graph"

    def __init__(self,
                 edges: Iterable[Tuple[Hashable, Hashable]],
                 nodes: Iterable[Hashable] = (),
                 heuristic_table: Optional[Mapping[Tuple[Hashable, Hashable], int]] = None):
        self.adjacency: Dict[Hashable, List[Hashable]] = {node: [] for node in nodes}
        for a, b in edges:
            self.adjacency.setdefault(a, [])
            self.adjacency.setdefault(b, [])
            if b not in self.adjacency[a]:
                self.adjacency[a].append(b)
            if a not in self.adjacency[b]:
                self.adjacency[b].append(a)
        self.heuristic_table = dict(heuristic_table or {})

    def normalize(self, state: Any) -> State:
        return state

    def validate(self, initial: State, goal: State) -> None:
        for label, state in (('initial', initial), ('goal', goal)):
            if state not in self.adjacency:
                raise InvalidStateError(f"{label} state {state!r} is not a node of the graph")

    def successors(self, state: State, direction: Direction) -> List[State]:
        return list(self.adjacency[state])

    def heuristic(self, state: State, target: State, direction: Direction) -> int:
        return int(self.heuristic_table.get((state, target), 0))

    def random_instance(self, rng: random.Random) -> Tuple[State, State]:
        nodes = list(self.adjacency)
        return rng.choice(nodes), rng.choice(nodes)

    def params(self) -> Dict[str, Any]:
        return {
            'nodes': len(self.adjacency),
            'edges': sum(len(v) for v in self.adjacency.values()) // 2,
        }
