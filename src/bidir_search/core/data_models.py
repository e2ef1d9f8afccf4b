"""Core data models shared by the bidirectional search engines."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple, Union

from .exceptions import InvalidDirectionError


# States are opaque, immutable and hashable values supplied by a domain
State = Hashable

# Marker returned in place of a cost when no path exists
UNSOLVABLE = "unsolvable"

INFINITY = math.inf


class Direction(enum.Enum):
    """Search direction: forward from the initial state, backward from the goal."""

    FORWARD = "F"
    BACKWARD = "B"

    @property
    def opposite(self) -> 'Direction':
        if self is Direction.FORWARD:
            return Direction.BACKWARD
        return Direction.FORWARD

    def __str__(self) -> str:
        return self.value


def check_direction(direction: Any) -> Direction:
    """Return ``direction`` unchanged if it is a valid tag, else fail loudly."""
    if not isinstance(direction, Direction):
        raise InvalidDirectionError(f"invalid direction: {direction!r}")
    return direction


@dataclass
class SearchStatistics:
    """Counters collected during a single query."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    nodes_reopened: int = 0
    duplicate_states: int = 0
    collisions: int = 0
    outer_iterations: int = 0
    # (fLim, gLim_F, gLim_B) recorded after every split
    bound_trace: List[Tuple[int, int, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'nodes_reopened': self.nodes_reopened,
            'duplicate_states': self.duplicate_states,
            'collisions': self.collisions,
            'outer_iterations': self.outer_iterations,
            'bound_trace': [list(bounds) for bounds in self.bound_trace],
        }


@dataclass
class SearchResult:
    """Result of one bidirectional (or baseline) search query."""
    algorithm: str
    cost: Optional[int] = None  # None means unsolvable or not proven
    nodes_expanded: int = 0
    nodes_generated: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    # Best solution cost seen, even when the run stopped before proving it
    best_known: Optional[int] = None
    statistics: Optional[SearchStatistics] = None

    @property
    def is_solved(self) -> bool:
        return self.cost is not None

    @property
    def optimal_cost(self) -> Union[int, str]:
        """Optimal cost, or the ``UNSOLVABLE`` marker."""
        return self.cost if self.cost is not None else UNSOLVABLE

    def as_tuple(self) -> Tuple[Union[int, str], int]:
        return self.optimal_cost, self.nodes_expanded

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'cost': self.optimal_cost,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'best_known': self.best_known,
            'statistics': self.statistics.to_dict() if self.statistics else None,
        }


def finite_or_none(value: float) -> Optional[int]:
    """Convert an internal bound (possibly ``inf``) to an optional int."""
    if value == INFINITY:
        return None
    return int(value)
