"""Pancake (prefix-reversal) domain.

A state is a stack of ``n`` pancakes ordered top to bottom followed by the
plate, which never moves. A k-flip reverses the top ``k + 1`` elements.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Tuple

from bidir_search.core.data_models import Direction, State
from bidir_search.core.exceptions import InvalidStateError

from .base import SearchDomain


def flip(state: Tuple[int, ...], k: int) -> Tuple[int, ...]:
    """Reverse the elements at indices ``0..k`` of ``state``."""
    n = len(state) - 1
    if not 1 <= k < n:
        raise ValueError(f"flip index {k} out of range [1, {n - 1}]")
    return state[k::-1] + state[k + 1:]


def gap_count(state: Tuple[int, ...], target: Tuple[int, ...], gap_x: int = 0) -> int:
    """GAP-x heuristic: non-adjacent neighbours at positions ``gap_x`` and below.

    Elements are relabelled by their position in ``target`` so that the
    heuristic works for any goal ordering, not only the sorted stack. The pair
    formed by the bottom pancake and the plate is included.
    """
    position = {v: i for i, v in enumerate(target)}
    n = len(state) - 1
    gaps = 0
    for i in range(max(0, gap_x), n):
        if abs(position[state[i]] - position[state[i + 1]]) > 1:
            gaps += 1
    return gaps


class PancakeDomain(SearchDomain):
    """n-pancake problem with the GAP-x heuristic."""

    name = "pancake"

    def __init__(self, size: Optional[int] = None, gap_x: int = 0, blind_backward: bool = False):
        """Initialize pancake domain.

        Args:
            size: Number of pancakes for random instances (plate excluded)
            gap_x: Gaps among the top ``gap_x`` pancakes are ignored
            blind_backward: Use h = 0 in the backward direction
        """
        if gap_x < 0:
            raise ValueError(f"gap_x must be non-negative, got {gap_x}")
        self.size = size
        self.gap_x = gap_x
        self.blind_backward = blind_backward

    def validate(self, initial: State, goal: State) -> None:
        if len(initial) != len(goal):
            raise InvalidStateError(
                f"initial and goal differ in length: {len(initial)} != {len(goal)}"
            )
        if len(initial) < 2:
            raise InvalidStateError("a pancake state needs at least one pancake and the plate")
        if len(set(initial)) != len(initial) or len(set(goal)) != len(goal):
            raise InvalidStateError("pancake states must not contain duplicates")
        if set(initial) != set(goal):
            raise InvalidStateError("initial and goal must contain the same pancakes")
        if initial[-1] != goal[-1]:
            raise InvalidStateError(
                f"plate must be the same in both states: {initial[-1]} != {goal[-1]}"
            )

    def successors(self, state: State, direction: Direction) -> List[State]:
        # Flips are self-inverse, so both directions share one move set
        return [flip(state, k) for k in range(1, len(state) - 1)]

    def heuristic(self, state: State, target: State, direction: Direction) -> int:
        if self.blind_backward and direction is Direction.BACKWARD:
            return 0
        return gap_count(state, target, self.gap_x)

    def random_instance(self, rng: random.Random) -> Tuple[State, State]:
        if not self.size:
            raise ValueError("random instances need a pancake count (size)")
        pancakes = list(range(1, self.size + 1))
        rng.shuffle(pancakes)
        plate = self.size + 1
        return tuple(pancakes) + (plate,), tuple(range(1, plate + 1))

    def params(self) -> Dict[str, Any]:
        return {'size': self.size, 'gap_x': self.gap_x, 'blind_backward': self.blind_backward}
