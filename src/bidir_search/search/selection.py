"""Node-selection strategies for GBFHS level expansion.

Which eligible node GBFHS expands next only balances work between the two
directions; it does not affect optimality. Deterministic strategies exist so
runs can be reproduced exactly.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple

from bidir_search.core.data_models import Direction, State
from bidir_search.core.exceptions import SearchInvariantError


class ExpandableSet:
    """Set of states with O(1) add, discard and positional access."""

    def __init__(self):
        self._items: List[State] = []
        self._index: Dict[State, int] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, state: State) -> bool:
        return state in self._index

    def __iter__(self) -> Iterator[State]:
        return iter(self._items)

    def add(self, state: State) -> None:
        if state not in self._index:
            self._index[state] = len(self._items)
            self._items.append(state)

    def discard(self, state: State) -> None:
        index = self._index.pop(state, None)
        if index is None:
            return
        last = self._items.pop()
        if index < len(self._items):
            self._items[index] = last
            self._index[last] = index

    def at(self, index: int) -> State:
        return self._items[index]


class NodePicker(ABC):
    """Chooses the next (direction, state) from the two expandable sets."""

    name: str = "abstract"

    @abstractmethod
    def pick(self, expandable_f: ExpandableSet, expandable_b: ExpandableSet) -> Tuple[Direction, State]:
        """Return a member of one of the two (not both empty) sets."""

    @staticmethod
    def _check_nonempty(expandable_f: ExpandableSet, expandable_b: ExpandableSet) -> None:
        if not expandable_f and not expandable_b:
            raise SearchInvariantError("pick called with both expandable sets empty")


class UniformRandomPicker(NodePicker):
    """Uniform choice over the union of both expandable sets."""

    name = "uniform_random"

    def __init__(self, rng: random.Random):
        self.rng = rng

    def pick(self, expandable_f, expandable_b):
        self._check_nonempty(expandable_f, expandable_b)
        index = self.rng.randrange(len(expandable_f) + len(expandable_b))
        if index < len(expandable_f):
            return Direction.FORWARD, expandable_f.at(index)
        return Direction.BACKWARD, expandable_b.at(index - len(expandable_f))


class RoundRobinPicker(NodePicker):
    """Alternate directions, skipping a direction with nothing to expand."""

    name = "round_robin"

    def __init__(self):
        self._next = Direction.FORWARD

    def pick(self, expandable_f, expandable_b):
        self._check_nonempty(expandable_f, expandable_b)
        direction = self._next
        if direction is Direction.FORWARD and not expandable_f:
            direction = Direction.BACKWARD
        elif direction is Direction.BACKWARD and not expandable_b:
            direction = Direction.FORWARD
        self._next = direction.opposite
        if direction is Direction.FORWARD:
            return direction, expandable_f.at(0)
        return direction, expandable_b.at(0)


class ForwardFirstPicker(NodePicker):
    """Drain the forward set before touching the backward one."""

    name = "forward_first"

    def pick(self, expandable_f, expandable_b):
        self._check_nonempty(expandable_f, expandable_b)
        if expandable_f:
            return Direction.FORWARD, expandable_f.at(0)
        return Direction.BACKWARD, expandable_b.at(0)


PICKERS = (UniformRandomPicker.name, RoundRobinPicker.name, ForwardFirstPicker.name)


def create_picker(name: str, rng: Optional[random.Random] = None) -> NodePicker:
    """Create a node picker by name.

    Args:
        name: One of 'uniform_random', 'round_robin', 'forward_first'
        rng: Random source for 'uniform_random'

    Returns:
        Configured picker
    """
    if name == UniformRandomPicker.name:
        return UniformRandomPicker(rng or random.Random())
    if name == RoundRobinPicker.name:
        return RoundRobinPicker()
    if name == ForwardFirstPicker.name:
        return ForwardFirstPicker()
    raise ValueError(f"Unknown picker: {name} (expected one of {list(PICKERS)})")
