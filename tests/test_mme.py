"""Tests for the MMe bidirectional searcher."""

import pytest

from bidir_search.core import InvalidStateError
from bidir_search.domains import PancakeDomain, SlidingTileDomain, ExplicitGraphDomain
from bidir_search.search import SearchConfig
from bidir_search.search.mme import MMeSearcher, create_mme_searcher, mme_search


class TestMMeBasics:
    """Test MMe on small hand-checked instances."""

    def test_single_flip(self, pancake):
        """One flip apart: solved after a single forward expansion."""
        result = mme_search(pancake, (2, 1, 3, 4), (1, 2, 3, 4))
        assert result.cost == 1
        assert result.nodes_expanded == 1
        assert result.termination_reason == 'solved'
        assert result.as_tuple() == (1, 1)

    def test_zero_distance(self, pancake):
        """Identical endpoints cost 0 without expanding anything."""
        result = mme_search(pancake, (1, 2, 3, 4), (1, 2, 3, 4))
        assert result.cost == 0
        assert result.nodes_expanded == 0
        assert result.termination_reason == 'trivial'

    def test_path_graph(self):
        """Blind search along a path of length 2."""
        domain = ExplicitGraphDomain(edges=[('a', 'b'), ('b', 'c')])
        result = mme_search(domain, 'a', 'c')
        assert result.cost == 2
        assert result.statistics.collisions >= 1

    def test_puzzle_one_move(self, puzzle):
        result = mme_search(puzzle, (1, 2, 3, 4, 5, 6, 7, 0, 8), puzzle.goal_state())
        assert result.cost == 1

    def test_longer_pancake(self, pancake):
        """Reversing a whole stack takes exactly one flip."""
        result = mme_search(pancake, (5, 4, 3, 2, 1, 6), (1, 2, 3, 4, 5, 6))
        assert result.cost == 1

    def test_known_distance(self, pancake):
        """(3, 1, 2) needs two flips."""
        result = mme_search(pancake, (3, 1, 2, 4), (1, 2, 3, 4))
        assert result.cost == 2


class TestMMeUnsolvable:
    """Test MMe when no path exists."""

    def test_parity_mismatch(self):
        domain = SlidingTileDomain(dim=2)
        result = mme_search(domain, (2, 1, 3, 0), (1, 2, 3, 0))
        assert result.cost is None
        assert result.optimal_cost == 'unsolvable'
        assert result.termination_reason == 'unsolvable'

    def test_disconnected_graph(self, two_component_graph):
        result = mme_search(two_component_graph, 'a', 'x')
        assert result.optimal_cost == 'unsolvable'


class TestMMeConfiguration:
    """Test budgets, invariants and factories."""

    def test_expansion_budget(self, pancake):
        config = SearchConfig(max_expansions=1)
        result = MMeSearcher(config).search(pancake, (2, 4, 1, 5, 3, 6), (1, 2, 3, 4, 5, 6))
        assert result.termination_reason == 'budget_exhausted'
        assert result.cost is None
        assert result.nodes_expanded == 1

    def test_time_budget(self, pancake):
        config = SearchConfig(max_computation_time=1e-9)
        result = MMeSearcher(config).search(pancake, (2, 4, 1, 5, 3, 6), (1, 2, 3, 4, 5, 6))
        assert result.termination_reason == 'budget_exhausted'

    def test_invariant_checks(self, pancake, deterministic_config):
        result = MMeSearcher(deterministic_config).search(
            pancake, (4, 2, 5, 1, 3, 6), (1, 2, 3, 4, 5, 6))
        assert result.is_solved

    def test_invalid_input(self, pancake):
        with pytest.raises(InvalidStateError):
            mme_search(pancake, (1, 2, 3), (1, 2, 3, 4))

    def test_factory(self):
        searcher = create_mme_searcher(eps=1, check_invariants=True)
        assert isinstance(searcher, MMeSearcher)
        assert searcher.config.check_invariants

    def test_independent_queries(self, pancake):
        """A searcher can be reused; each query gets fresh counters."""
        searcher = MMeSearcher()
        first = searcher.search(pancake, (3, 1, 2, 4), (1, 2, 3, 4))
        second = searcher.search(pancake, (3, 1, 2, 4), (1, 2, 3, 4))
        assert first.as_tuple() == second.as_tuple()

    def test_blind_backward(self):
        domain = PancakeDomain(blind_backward=True)
        result = mme_search(domain, (3, 1, 2, 4), (1, 2, 3, 4))
        assert result.cost == 2
