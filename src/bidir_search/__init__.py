"""Bidirectional heuristic search (MMe and GBFHS) over combinatorial puzzles."""

__version__ = "0.1.0"

from .core import Direction, SearchResult, UNSOLVABLE
from .domains import PancakeDomain, SlidingTileDomain, ExplicitGraphDomain, create_domain
from .search import (
    SearchConfig, MMeSearcher, GBFHSSearcher, AStarSearcher,
    mme_search, gbfhs_search, astar_search, create_searcher, cross_check
)

__all__ = [
    '__version__',
    'Direction',
    'SearchResult',
    'UNSOLVABLE',
    'PancakeDomain',
    'SlidingTileDomain',
    'ExplicitGraphDomain',
    'create_domain',
    'SearchConfig',
    'MMeSearcher',
    'GBFHSSearcher',
    'AStarSearcher',
    'mme_search',
    'gbfhs_search',
    'astar_search',
    'create_searcher',
    'cross_check'
]
