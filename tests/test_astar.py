"""Tests for the A* baseline searcher."""

import heapq

import pytest

from bidir_search.domains import ExplicitGraphDomain, SlidingTileDomain
from bidir_search.search import SearchConfig
from bidir_search.search.astar import AStarSearcher, SearchNode, create_astar_searcher, astar_search


class TestSearchNode:
    """Test SearchNode functionality."""

    def test_f_score_calculation(self):
        node = SearchNode(state=(1, 2), cost=2, heuristic=3)
        assert node.f_score == 5

    def test_node_comparison(self):
        """Lower f first, deeper node on ties."""
        low = SearchNode(state='a', cost=1, heuristic=1)
        high = SearchNode(state='b', cost=0, heuristic=4)
        deep = SearchNode(state='c', cost=2, heuristic=0)
        assert low < high
        assert deep < low

    def test_heap_order(self):
        nodes = [
            SearchNode(state='x', cost=0, heuristic=5),
            SearchNode(state='y', cost=1, heuristic=2),
            SearchNode(state='z', cost=3, heuristic=0),
        ]
        heap = []
        for node in nodes:
            heapq.heappush(heap, node)
        assert [heapq.heappop(heap).state for _ in range(3)] == ['z', 'y', 'x']


class TestAStarSearcher:
    """Test AStarSearcher functionality."""

    @pytest.fixture
    def searcher(self):
        return AStarSearcher(SearchConfig())

    def test_searcher_initialization(self, searcher):
        assert searcher.name == 'astar'
        assert searcher.config.eps == 1

    def test_identical_states(self, searcher, pancake):
        result = searcher.search(pancake, (1, 2, 3, 4), (1, 2, 3, 4))
        assert result.as_tuple() == (0, 0)

    def test_single_flip(self, searcher, pancake):
        result = searcher.search(pancake, (2, 1, 3, 4), (1, 2, 3, 4))
        assert result.cost == 1
        assert result.nodes_expanded == 1

    def test_puzzle(self, searcher, puzzle):
        result = searcher.search(puzzle, (1, 2, 3, 4, 0, 6, 7, 5, 8), puzzle.goal_state())
        assert result.cost == 2

    def test_unsolvable(self, searcher):
        result = searcher.search(SlidingTileDomain(dim=2), (2, 1, 3, 0), (1, 2, 3, 0))
        assert result.termination_reason == 'unsolvable'
        assert result.nodes_expanded == 12

    def test_reopening(self, searcher):
        """An admissible but inconsistent heuristic forces a closed node to reopen."""
        domain = ExplicitGraphDomain(
            edges=[('s', 'x'), ('x', 'a'), ('s', 'b'), ('b', 'c'), ('c', 'a'), ('a', 't')],
            heuristic_table={('x', 't'): 2},
        )
        result = searcher.search(domain, 's', 't')
        assert result.cost == 3
        assert result.statistics.nodes_reopened == 1

    def test_node_limit(self, pancake):
        searcher = AStarSearcher(SearchConfig(max_expansions=2))
        result = searcher.search(pancake, (2, 4, 1, 5, 3, 6), (1, 2, 3, 4, 5, 6))
        assert result.termination_reason == 'budget_exhausted'
        assert result.nodes_expanded == 2


class TestAStarFactory:
    """Test factory helpers."""

    def test_create_default_searcher(self):
        searcher = create_astar_searcher()
        assert isinstance(searcher, AStarSearcher)

    def test_astar_search(self, pancake):
        assert astar_search(pancake, (3, 1, 2, 4), (1, 2, 3, 4)).cost == 2
