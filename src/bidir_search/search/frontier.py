"""Per-direction cost store and open/closed frontier bookkeeping.

Costs live in a mapping keyed by state that is kept apart from frontier
membership: updating ``g`` never touches a set that hashes the state.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Set

from bidir_search.core.data_models import Direction, State, check_direction
from bidir_search.core.exceptions import SearchInvariantError

logger = logging.getLogger(__name__)


class CostStore:
    """Best known path cost ``g_D(state)`` for one direction.

    A state absent from the store has not been reached in that direction.
    """

    def __init__(self, direction: Direction):
        self.direction = check_direction(direction)
        self._costs: Dict[State, int] = {}

    def __getitem__(self, state: State) -> int:
        try:
            return self._costs[state]
        except KeyError:
            raise SearchInvariantError(
                f"no {self.direction} cost recorded for state {state!r}"
            ) from None

    def __setitem__(self, state: State, cost: int) -> None:
        self._costs[state] = cost

    def __contains__(self, state: State) -> bool:
        return state in self._costs

    def __len__(self) -> int:
        return len(self._costs)

    def get(self, state: State, default: Optional[int] = None) -> Optional[int]:
        return self._costs.get(state, default)


class Frontier:
    """Open and closed sets plus the cost store of one search direction.

    The open set is an insertion-ordered dict used as a set, so scans over it
    are deterministic within a run.
    """

    def __init__(self, direction: Direction, root: State):
        self.direction = check_direction(direction)
        self.open: Dict[State, None] = {root: None}
        self.closed: Set[State] = set()
        self.g = CostStore(direction)
        self.g[root] = 0

    def __contains__(self, state: State) -> bool:
        return state in self.open or state in self.closed

    def __iter__(self) -> Iterator[State]:
        return iter(self.open)

    def __len__(self) -> int:
        return len(self.open)

    def __bool__(self) -> bool:
        return bool(self.open)

    def is_open(self, state: State) -> bool:
        return state in self.open

    def close(self, state: State) -> None:
        """Move ``state`` from open to closed."""
        if state not in self.open:
            raise SearchInvariantError(f"cannot close {state!r}: not open in {self.direction}")
        del self.open[state]
        self.closed.add(state)

    def relax(self, state: State, cost: int) -> bool:
        """Offer a path of ``cost`` to ``state``.

        Returns False when a path at least as cheap is already known. Otherwise
        records the cost, pulls the state out of open/closed and (re)inserts it
        into open, returning True.
        """
        if state in self:
            if self.g[state] <= cost:
                return False
            if state in self.closed:
                self.closed.discard(state)
            else:
                del self.open[state]
        self.g[state] = cost
        self.open[state] = None
        return True

    def check_invariants(self) -> None:
        """Verify that open and closed are disjoint and every member has a cost."""
        overlap = self.closed.intersection(self.open)
        if overlap:
            raise SearchInvariantError(
                f"{len(overlap)} state(s) both open and closed in {self.direction}: "
                f"{next(iter(overlap))!r}"
            )
        for state in self.open:
            if state not in self.g:
                raise SearchInvariantError(f"open state {state!r} has no {self.direction} cost")
        for state in self.closed:
            if state not in self.g:
                raise SearchInvariantError(f"closed state {state!r} has no {self.direction} cost")


def make_frontiers(initial: State, goal: State) -> Dict[Direction, Frontier]:
    """Forward frontier rooted at ``initial``, backward frontier rooted at ``goal``."""
    return {
        Direction.FORWARD: Frontier(Direction.FORWARD, initial),
        Direction.BACKWARD: Frontier(Direction.BACKWARD, goal),
    }


def collision_cost(frontier: Frontier, opposite: Frontier, state: State) -> Optional[int]:
    """Full path cost through ``state`` if it is open in the opposite direction."""
    if not opposite.is_open(state):
        return None
    cost = frontier.g[state] + opposite.g[state]
    logger.debug(f"Collision at {state!r}: {frontier.g[state]} + {opposite.g[state]} = {cost}")
    return cost
