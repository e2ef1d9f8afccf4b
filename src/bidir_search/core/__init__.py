"""Core types for bidirectional heuristic search."""

from .data_models import (
    Direction, SearchResult, SearchStatistics, State, UNSOLVABLE, INFINITY,
    check_direction
)
from .context import SearchContext, BudgetExhausted
from .exceptions import InvalidDirectionError, SearchInvariantError, InvalidStateError

__all__ = [
    'Direction',
    'SearchResult',
    'SearchStatistics',
    'State',
    'UNSOLVABLE',
    'INFINITY',
    'check_direction',
    'SearchContext',
    'BudgetExhausted',
    'InvalidDirectionError',
    'SearchInvariantError',
    'InvalidStateError'
]
