"""Search algorithms for bidirectional heuristic search.

This module implements the MMe and GBFHS bidirectional engines, the shared
frontier bookkeeping and evaluators they run on, and a unidirectional A*
baseline used to cross-check optimality.
"""

from .base import SearchConfig, Searcher
from .frontier import CostStore, Frontier, make_frontiers, collision_cost
from .evaluators import priority, scan, ScanResult, is_expandable, split
from .selection import (
    ExpandableSet, NodePicker, UniformRandomPicker, RoundRobinPicker,
    ForwardFirstPicker, create_picker
)
from .mme import MMeSearcher, create_mme_searcher, mme_search
from .gbfhs import GBFHSSearcher, create_gbfhs_searcher, gbfhs_search
from .astar import AStarSearcher, SearchNode, create_astar_searcher, astar_search
from .portfolio import CrossCheckReport, create_searcher, cross_check, available_algorithms

__all__ = [
    'SearchConfig',
    'Searcher',
    'CostStore',
    'Frontier',
    'make_frontiers',
    'collision_cost',
    'priority',
    'scan',
    'ScanResult',
    'is_expandable',
    'split',
    'ExpandableSet',
    'NodePicker',
    'UniformRandomPicker',
    'RoundRobinPicker',
    'ForwardFirstPicker',
    'create_picker',
    'MMeSearcher',
    'create_mme_searcher',
    'mme_search',
    'GBFHSSearcher',
    'create_gbfhs_searcher',
    'gbfhs_search',
    'AStarSearcher',
    'SearchNode',
    'create_astar_searcher',
    'astar_search',
    'CrossCheckReport',
    'create_searcher',
    'cross_check',
    'available_algorithms'
]
