"""Domain interface consumed by the search engines.

A domain supplies successor generation, an admissible and consistent
heuristic, and state equality. The engines never look inside a state.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from bidir_search.core.data_models import Direction, State, check_direction


class SearchDomain(ABC):
    """Abstract state domain with unit-cost, reversible moves.

    A domain instance only holds its parameters and may be shared by many
    queries; per-query caches live on ``Problem``.
    """

    #: Cost of every move. Searchers assume eps does not exceed it.
    move_cost: int = 1

    name: str = "abstract"

    def normalize(self, state: Any) -> State:
        """Convert user input (lists, arrays) to the canonical hashable form."""
        return tuple(int(v) for v in state)

    @abstractmethod
    def validate(self, initial: State, goal: State) -> None:
        """Raise ``InvalidStateError`` if the pair cannot be searched."""

    @abstractmethod
    def successors(self, state: State, direction: Direction) -> List[State]:
        """States one move away from ``state`` when searching in ``direction``."""

    @abstractmethod
    def heuristic(self, state: State, target: State, direction: Direction) -> int:
        """Admissible, consistent estimate of the moves from ``state`` to ``target``."""

    def is_goal(self, state: State, goal: State) -> bool:
        return state == goal

    @abstractmethod
    def random_instance(self, rng: random.Random) -> Tuple[State, State]:
        """Draw a random solvable (initial, goal) pair."""

    def scrambled_instance(self, goal: State, moves: int, rng: random.Random) -> Tuple[State, State]:
        """Walk ``moves`` random steps back from ``goal``; returns (initial, goal)."""
        state = goal
        for _ in range(moves):
            state = rng.choice(self.successors(state, Direction.BACKWARD))
        return state, goal

    def params(self) -> Dict[str, Any]:
        """Domain parameters, for logging and result records."""
        return {}


class Problem:
    """A domain bound to one (initial, goal) pair.

    The forward heuristic estimates the distance to the goal, the backward
    heuristic the distance to the initial state. Heuristic values are memoised
    per direction since they depend on the state alone.
    """

    def __init__(self, domain: SearchDomain, initial: Any, goal: Any, validate: bool = True):
        self.domain = domain
        self.initial = domain.normalize(initial)
        self.goal = domain.normalize(goal)
        if validate:
            domain.validate(self.initial, self.goal)
        self._h_cache: Dict[Direction, Dict[State, int]] = {
            Direction.FORWARD: {},
            Direction.BACKWARD: {},
        }

    def endpoint(self, direction: Direction) -> State:
        """State a direction's search starts from."""
        check_direction(direction)
        return self.initial if direction is Direction.FORWARD else self.goal

    def h(self, state: State, direction: Direction) -> int:
        cache = self._h_cache.get(check_direction(direction))
        value = cache.get(state)
        if value is None:
            target = self.endpoint(direction.opposite)
            value = self.domain.heuristic(state, target, direction)
            cache[state] = value
        return value

    def successors(self, state: State, direction: Direction) -> List[State]:
        return self.domain.successors(state, check_direction(direction))

    def is_trivial(self) -> bool:
        return self.domain.is_goal(self.initial, self.goal)

    def __repr__(self) -> str:
        return f"Problem(domain={self.domain.name}, initial={self.initial}, goal={self.goal})"
