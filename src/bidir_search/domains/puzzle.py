"""Sliding-tile (n-puzzle) domain.

States are row-major tuples of ``dim * dim`` tiles with ``0`` as the blank.
Moves slide the blank up, down, left or right.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Tuple

import numpy as np

from bidir_search.core.data_models import Direction, State
from bidir_search.core.exceptions import InvalidStateError

from .base import SearchDomain


BLANK = 0

# (row delta, col delta) for Up, Down, Left, Right
MOVES: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def inversion_count(state: Tuple[int, ...]) -> int:
    """Number of tile pairs out of order, ignoring the blank."""
    tiles = [v for v in state if v != BLANK]
    inversions = 0
    for i in range(len(tiles) - 1):
        for j in range(i + 1, len(tiles)):
            if tiles[i] > tiles[j]:
                inversions += 1
    return inversions


def _parity_signature(state: Tuple[int, ...], dim: int) -> int:
    parity = inversion_count(state)
    if dim % 2 == 0:
        # On even widths a vertical blank move also flips inversion parity
        parity += state.index(BLANK) // dim
    return parity % 2


class SlidingTileDomain(SearchDomain):
    """n-puzzle with a (degradable) Manhattan distance heuristic."""

    name = "puzzle"

    def __init__(self, dim: int = 3, discount: int = 0):
        """Initialize sliding-tile domain.

        Args:
            dim: Board width and height
            discount: Tiles numbered below ``discount`` are left out of the heuristic
        """
        if dim < 2:
            raise ValueError(f"board dimension must be at least 2, got {dim}")
        self.dim = dim
        self.discount = discount

    def validate(self, initial: State, goal: State) -> None:
        expected = set(range(self.dim * self.dim))
        for label, state in (('initial', initial), ('goal', goal)):
            if len(state) != self.dim * self.dim:
                raise InvalidStateError(
                    f"{label} state has {len(state)} tiles, expected {self.dim * self.dim}"
                )
            if set(state) != expected:
                raise InvalidStateError(
                    f"{label} state must hold each of 0..{self.dim * self.dim - 1} exactly once"
                )

    def is_solvable(self, initial: State, goal: State) -> bool:
        """True iff ``goal`` is reachable from ``initial`` (same permutation parity)."""
        return _parity_signature(initial, self.dim) == _parity_signature(goal, self.dim)

    def successors(self, state: State, direction: Direction) -> List[State]:
        # Slides are reversible, so both directions share one move set
        index = state.index(BLANK)
        row, col = divmod(index, self.dim)
        successors = []
        for d_row, d_col in MOVES:
            n_row, n_col = row + d_row, col + d_col
            if 0 <= n_row < self.dim and 0 <= n_col < self.dim:
                swap = n_row * self.dim + n_col
                tiles = list(state)
                tiles[index], tiles[swap] = tiles[swap], tiles[index]
                successors.append(tuple(tiles))
        return successors

    def _positions(self, state: State) -> np.ndarray:
        """(row, col) of every tile value, indexed by value."""
        positions = np.empty((len(state), 2), dtype=np.int32)
        for index, value in enumerate(state):
            positions[value] = divmod(index, self.dim)
        return positions

    def heuristic(self, state: State, target: State, direction: Direction) -> int:
        first_tile = max(1, self.discount)
        if first_tile >= len(state):
            return 0
        offsets = self._positions(state) - self._positions(target)
        distances = np.abs(offsets[first_tile:])
        return int(distances.sum())

    def goal_state(self) -> State:
        """Solved board: tiles in order with the blank in the last cell."""
        return tuple(range(1, self.dim * self.dim)) + (BLANK,)

    def random_instance(self, rng: random.Random) -> Tuple[State, State]:
        goal = self.goal_state()
        while True:
            tiles = list(goal)
            rng.shuffle(tiles)
            initial = tuple(tiles)
            if self.is_solvable(initial, goal):
                return initial, goal

    def params(self) -> Dict[str, Any]:
        return {'dim': self.dim, 'discount': self.discount}
